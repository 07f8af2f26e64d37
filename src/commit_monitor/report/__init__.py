"""Markdown review reports."""

from commit_monitor.report.formatter import (
    CommitUriResolver,
    Report,
    format_report,
    pluralize,
)

__all__ = ["CommitUriResolver", "Report", "format_report", "pluralize"]
