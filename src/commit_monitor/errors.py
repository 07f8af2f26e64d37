"""Exception taxonomy and error classification.

Every pipeline stage fails closed by raising a CommitMonitorError
subclass. Nothing here retries; classify_error() only labels a
failure in the logs so operators can tell outages from bad input.
"""

from __future__ import annotations

from enum import Enum


class CommitMonitorError(Exception):
    """Base class for failures that abort a review."""


class RepositoryError(CommitMonitorError):
    """A commit id or ref could not be resolved, or git failed."""


class AnalysisToolError(CommitMonitorError):
    """The analysis tool wrote diagnostics to its error stream."""

    def __init__(
        self,
        message: str,
        *,
        diagnostics: str = "",
        exit_status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.diagnostics = diagnostics
        self.exit_status = exit_status


class AnalysisOutputError(CommitMonitorError):
    """The analysis tool's stdout was not the expected JSON document."""


class PublishError(CommitMonitorError):
    """The report could not be delivered to the pull request."""

    def __init__(
        self, message: str, *, status_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class ErrorClass(Enum):
    TRANSIENT = "transient"  # 429, unreachable host
    SERVER = "server"  # 5xx
    TIMEOUT = "timeout"
    CLIENT = "client"  # 4xx, broken tool integration, bad commit ids
    UNKNOWN = "unknown"


def classify_error(error: Exception) -> ErrorClass:
    """Label a failure for the ``error_class`` log field.

    Checks the HTTP status code first, then the exception type.
    """
    status_code = getattr(error, "status_code", None)
    if isinstance(status_code, int):
        if status_code == 429:
            return ErrorClass.TRANSIENT
        if 400 <= status_code < 500:
            return ErrorClass.CLIENT
        if 500 <= status_code < 600:
            return ErrorClass.SERVER

    if isinstance(error, TimeoutError):
        return ErrorClass.TIMEOUT
    if isinstance(
        error, (RepositoryError, AnalysisToolError, AnalysisOutputError)
    ):
        return ErrorClass.CLIENT
    if isinstance(error, PublishError):
        # No response at all: the host was never reached.
        return ErrorClass.TRANSIENT
    return ErrorClass.UNKNOWN
