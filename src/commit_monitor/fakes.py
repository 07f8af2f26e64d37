"""In-memory fakes for the collaborator protocols.

No git, no network — instant operations for unit tests.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from commit_monitor.errors import PublishError, RepositoryError
from commit_monitor.git.schemas import CommitRange, DiffDetails, PullRequestRef


class FakeRepository:
    """Dict-backed RepositorySource.

    ``diffs`` is keyed by ``(first, last)``; an unknown pair raises
    RepositoryError like an unresolvable commit would.
    """

    def __init__(
        self,
        path: Path,
        diffs: dict[tuple[str, str], DiffDetails] | None = None,
    ) -> None:
        self.path = path
        self._diffs = diffs or {}
        self.checked_out: str | None = None
        self.checkouts: list[str] = []

    async def diff_details(self, commit_range: CommitRange) -> DiffDetails:
        key = (commit_range.first, commit_range.last)
        if key not in self._diffs:
            raise RepositoryError(f"Unresolvable commit range {commit_range}")
        return {path: set(lines) for path, lines in self._diffs[key].items()}

    @asynccontextmanager
    async def temporarily_checkout(self, commit: str) -> AsyncIterator[Path]:
        previous = self.checked_out
        self.checked_out = commit
        self.checkouts.append(commit)
        try:
            yield self.path
        finally:
            self.checked_out = previous


class FakeCommentSink:
    """Records posted comments; optionally fails every post."""

    def __init__(self, fail_with: Exception | None = None) -> None:
        self.comments: list[tuple[PullRequestRef, str]] = []
        self._fail_with = fail_with

    async def post_comment(
        self, pull_request: PullRequestRef, body: str
    ) -> None:
        if self._fail_with is not None:
            raise self._fail_with
        self.comments.append((pull_request, body))


class FakeRuleCatalog:
    """Resolves only the rule ids it was given."""

    def __init__(self, uris: dict[str, str] | None = None) -> None:
        self._uris = uris or {}

    def resolve_doc_uri(self, rule_id: str) -> str | None:
        return self._uris.get(rule_id)


def failing_sink(status_code: int = 502) -> FakeCommentSink:
    return FakeCommentSink(
        fail_with=PublishError("upstream failure", status_code=status_code)
    )
