"""Git access — commit ranges, changed-line diffs, scoped checkouts."""

from commit_monitor.git.diff import parse_unified_diff
from commit_monitor.git.repository import GitRepository
from commit_monitor.git.schemas import (
    BranchRecord,
    CommitRange,
    DiffDetails,
    PullRequestRef,
)

__all__ = [
    "BranchRecord",
    "CommitRange",
    "DiffDetails",
    "GitRepository",
    "PullRequestRef",
    "parse_unified_diff",
]
