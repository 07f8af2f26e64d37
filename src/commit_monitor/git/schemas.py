"""Pydantic models for commit ranges and branch records."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, model_validator

from commit_monitor.constants import BranchMode

# Relative path → line numbers (at the range tip) added or modified.
DiffDetails: TypeAlias = dict[str, set[int]]


class CommitRange(BaseModel):
    """Ordered pair of commit ids bounding the changes under review."""

    model_config = ConfigDict(frozen=True)

    first: str = Field(min_length=1)
    last: str = Field(min_length=1)
    commit_count: int = Field(default=1, ge=1)

    @model_validator(mode="before")
    @classmethod
    def _default_count(cls, data: Any) -> Any:
        """Count both endpoints unless the caller knows the real length."""
        if isinstance(data, dict) and not data.get("commit_count"):
            same = data.get("first") == data.get("last")
            return {**data, "commit_count": 1 if same else 2}
        return data

    @classmethod
    def from_commits(cls, commits: Sequence[str]) -> CommitRange:
        """Build a range from the ordered commit list of a commit event."""
        if not commits:
            raise ValueError("commit range needs at least one commit")
        return cls(
            first=commits[0],
            last=commits[-1],
            commit_count=len(commits),
        )

    @property
    def is_single_commit(self) -> bool:
        return self.first == self.last

    def __str__(self) -> str:
        if self.is_single_commit:
            return self.first
        return f"{self.first}..{self.last}"


class BranchRecord(BaseModel):
    """A monitored branch, as handed to a commit-range handler."""

    name: str
    repo_path: Path
    repo_name: str  # "owner/name" on GitHub
    pr_number: int | None = None
    local: bool = False

    @property
    def mode(self) -> BranchMode:
        if self.pr_number is not None:
            return BranchMode.PR
        return BranchMode.LOCAL if self.local else BranchMode.REGULAR

    @property
    def is_pull_request(self) -> bool:
        return self.mode == BranchMode.PR

    def commit_uri_to(self, commit: str, template: str) -> str:
        """Render a display URI for ``commit`` in this branch's repo."""
        return template.format(repo=self.repo_name, sha=commit)

    @property
    def pull_request(self) -> PullRequestRef | None:
        if self.pr_number is None:
            return None
        return PullRequestRef(repo_name=self.repo_name, number=self.pr_number)


class PullRequestRef(BaseModel):
    """Address of a pull request's comment stream."""

    model_config = ConfigDict(frozen=True)

    repo_name: str
    number: int

    def __str__(self) -> str:
        return f"{self.repo_name}#{self.number}"
