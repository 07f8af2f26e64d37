"""Protocol-based collaborator interfaces.

Concrete implementations satisfy these protocols structurally (no
inheritance). Test doubles live in ``commit_monitor.fakes``.
"""

from contextlib import AbstractAsyncContextManager
from pathlib import Path
from typing import Protocol

from commit_monitor.git.schemas import CommitRange, DiffDetails, PullRequestRef


class RepositorySource(Protocol):
    async def diff_details(self, commit_range: CommitRange) -> DiffDetails: ...
    def temporarily_checkout(
        self, commit: str
    ) -> AbstractAsyncContextManager[Path]: ...


class PullRequestCommentSink(Protocol):
    async def post_comment(
        self, pull_request: PullRequestRef, body: str
    ) -> None: ...


class RuleResolver(Protocol):
    def resolve_doc_uri(self, rule_id: str) -> str | None: ...
