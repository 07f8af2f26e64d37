"""Render filtered findings as a markdown pull-request comment.

Output is a pure function of its inputs: files sorted by path,
findings by (severity rank, line, column, rule), so a retried job
posts a byte-identical comment.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

from commit_monitor.analysis.schemas import Finding, FindingSet
from commit_monitor.constants import (
    COMMIT_RANGE_SEPARATOR,
    SEVERITY_LABEL_WIDTH,
    SEVERITY_LABELS,
)
from commit_monitor.git.schemas import CommitRange
from commit_monitor.protocols import RuleResolver

CommitUriResolver: TypeAlias = Callable[[str], str]


@dataclass(frozen=True)
class Report:
    """Ordered report lines."""

    lines: tuple[str, ...]

    @property
    def text(self) -> str:
        return "\n".join(self.lines) + "\n"


def pluralize(count: int, word: str) -> str:
    """``1 file`` / ``0 files`` / ``2 files``."""
    return f"{count} {word if count == 1 else word + 's'}"


def format_severity(severity: str) -> str:
    """Fixed label for known severities, else a 5-char capitalized stub."""
    label = SEVERITY_LABELS.get(severity)
    if label is not None:
        return label
    return severity.capitalize()[:SEVERITY_LABEL_WIDTH]


def format_rule(rule_id: str, catalog: RuleResolver | None = None) -> str:
    """Markdown link to the rule's docs, or the bare id."""
    uri = catalog.resolve_doc_uri(rule_id) if catalog is not None else None
    if uri is None:
        return rule_id
    return f"[{rule_id}]({uri})"


def sort_findings(findings: list[Finding] | tuple[Finding, ...]) -> list[Finding]:
    return sorted(findings, key=lambda f: f.sort_key)


def format_finding(
    finding: Finding, catalog: RuleResolver | None = None
) -> str:
    return (
        f"- [ ] {format_severity(finding.severity)}"
        f" - Line {finding.line}, Col {finding.column}"
        f" - {format_rule(finding.rule_id, catalog)}"
        f" - {finding.message}"
    )


def format_header(
    commit_count: int, first: str, last: str, commit_uri: CommitUriResolver
) -> str:
    """``Checked commits <uri> .. <uri>``; identical URIs collapse."""
    uris = list(dict.fromkeys([commit_uri(first), commit_uri(last)]))
    word = "commit" if commit_count == 1 else "commits"
    return f"Checked {word} {COMMIT_RANGE_SEPARATOR.join(uris)}"


def format_report(
    finding_set: FindingSet,
    commit_range: CommitRange,
    commit_uri: CommitUriResolver,
    rule_catalog: RuleResolver | None = None,
) -> Report:
    """Build the review comment for ``finding_set``."""
    lines = [
        format_header(
            commit_range.commit_count,
            commit_range.first,
            commit_range.last,
            commit_uri,
        ),
        f"{pluralize(finding_set.target_file_count, 'file')} checked, "
        f"{pluralize(finding_set.offense_count, 'offense')} detected",
    ]

    for file in sorted(finding_set.files, key=lambda f: f.path):
        if not file.findings:
            continue
        lines.append("")
        lines.append(f"**{file.path}**")
        lines.extend(
            format_finding(finding, rule_catalog)
            for finding in sort_findings(file.findings)
        )

    return Report(lines=tuple(lines))
