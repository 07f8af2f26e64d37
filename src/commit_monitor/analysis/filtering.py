"""Scope findings to the lines a change actually touched."""

from __future__ import annotations

from commit_monitor.analysis.schemas import FileFindings, Finding, FindingSet
from commit_monitor.constants import ALWAYS_REPORTED_SEVERITIES
from commit_monitor.git.schemas import DiffDetails


def is_relevant(finding: Finding, diff_details: DiffDetails) -> bool:
    """Fatal/error findings always count; others only on changed lines."""
    if finding.severity in ALWAYS_REPORTED_SEVERITIES:
        return True
    return finding.line in diff_details.get(finding.file_path, ())


def filter_findings(
    finding_set: FindingSet, diff_details: DiffDetails
) -> FindingSet:
    """Drop findings that fall outside the change.

    Returns a new set; its ``offense_count`` reflects only the
    surviving findings.
    """
    files = tuple(
        FileFindings(
            path=f.path,
            findings=tuple(
                finding
                for finding in f.findings
                if is_relevant(finding, diff_details)
            ),
        )
        for f in finding_set.files
    )
    return finding_set.model_copy(update={"files": files})
