"""Shared constants — single source of truth for cross-module values.

StrEnum members are str-compatible, so raw tool output (JSON
severity strings) compares against them directly.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class Severity(StrEnum):
    """RuboCop offense severities, most severe first."""

    FATAL = "fatal"
    ERROR = "error"
    WARNING = "warning"
    CONVENTION = "convention"
    REFACTOR = "refactor"


class BranchMode(StrEnum):
    """Kind of branch a commit event was raised for."""

    REGULAR = "regular"
    PR = "pr"
    LOCAL = "local"  # ad-hoc run on a working tree, nowhere to publish


class ReviewOutcome(StrEnum):
    """Terminal outcome of one commit-range review.

    Everything except REPORTED and PUBLISHED is a short-circuit success;
    failures are raised as CommitMonitorError subclasses.
    """

    SKIPPED_NOT_PULL_REQUEST = "skipped_not_pull_request"
    NO_RELEVANT_FILES = "no_relevant_files"
    CLEAN = "clean"
    REPORTED = "reported"  # report built, publishing disabled
    PUBLISHED = "published"


class ReviewStage(StrEnum):
    """Pipeline stage names used in structured log records."""

    DIFF = "diff"
    CLASSIFY = "classify"
    ANALYZE = "analyze"
    FILTER = "filter"
    FORMAT = "format"
    PUBLISH = "publish"


# ── Severity Tables ──────────────────────────────────────

# Insertion order is the sort rank (index 0 sorts first).
SEVERITY_LABELS: dict[str, str] = {
    Severity.FATAL: "Fatal",
    Severity.ERROR: "Error",
    Severity.WARNING: "Warn",
    Severity.CONVENTION: "Style",
    Severity.REFACTOR: "Refac",
}

SEVERITY_LABEL_WIDTH = 5

# Findings at these severities are reported even off the changed lines.
ALWAYS_REPORTED_SEVERITIES = frozenset({Severity.FATAL, Severity.ERROR})

# ── File Classification ──────────────────────────────────

LINTABLE_EXTENSIONS = (".rb", ".ru", ".rake")
LINTABLE_FILENAMES = ("Gemfile", "Rakefile")

# ── Git ──────────────────────────────────────────────────

# Hash of the empty tree; diff base for a root commit.
GIT_EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"
GIT_DEV_NULL = "/dev/null"

# ── Report ───────────────────────────────────────────────

COMMIT_RANGE_SEPARATOR = " .. "

# ── Misc ─────────────────────────────────────────────────

ERROR_TRUNCATION_CHARS = 200
