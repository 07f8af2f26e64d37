"""Pydantic models for RuboCop findings.

``RubocopReport`` mirrors the tool's JSON document; ``FindingSet``
is the normalized form the rest of the pipeline works with.
"""

from __future__ import annotations

import math

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from commit_monitor.constants import SEVERITY_LABELS


class Finding(BaseModel):
    """One diagnostic at a file position."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    line: int
    column: int
    severity: str  # raw tool value; unknown severities are kept
    rule_id: str
    message: str

    @property
    def severity_rank(self) -> float:
        """Position in the fixed severity order; unknown sorts last."""
        try:
            return float(list(SEVERITY_LABELS).index(self.severity))
        except ValueError:
            return math.inf

    @property
    def sort_key(self) -> tuple[float, int, int, str]:
        return (self.severity_rank, self.line, self.column, self.rule_id)


class FileFindings(BaseModel):
    """Findings reported for a single file."""

    model_config = ConfigDict(frozen=True)

    path: str
    findings: tuple[Finding, ...] = ()


class FindingSet(BaseModel):
    """All findings from one tool run.

    ``offense_count`` is derived from the findings and is therefore
    always current after filtering. ``reported_offense_count`` is the
    tool's own summary figure, kept for logging only.
    """

    model_config = ConfigDict(frozen=True)

    target_file_count: int = 0
    files: tuple[FileFindings, ...] = ()
    reported_offense_count: int | None = None

    @property
    def offense_count(self) -> int:
        return sum(len(f.findings) for f in self.files)

    def findings(self) -> list[Finding]:
        return [finding for f in self.files for finding in f.findings]


# ── Tool output schema ────────────────────────────────────


class _Location(BaseModel):
    line: int
    column: int = 0


class _Offense(BaseModel):
    severity: str
    message: str
    cop_name: str
    location: _Location


class _File(BaseModel):
    path: str
    offenses: list[_Offense] = Field(
        default_factory=lambda: list[_Offense](),
        validation_alias=AliasChoices("offenses", "offences"),
    )


class _Summary(BaseModel):
    target_file_count: int = 0
    offense_count: int | None = Field(
        default=None,
        validation_alias=AliasChoices("offense_count", "offence_count"),
    )


class RubocopReport(BaseModel):
    """The ``rubocop --format json`` document."""

    summary: _Summary
    files: list[_File] = Field(default_factory=lambda: list[_File]())

    def to_finding_set(self) -> FindingSet:
        return FindingSet(
            target_file_count=self.summary.target_file_count,
            reported_offense_count=self.summary.offense_count,
            files=tuple(
                FileFindings(
                    path=f.path,
                    findings=tuple(
                        Finding(
                            file_path=f.path,
                            line=o.location.line,
                            column=o.location.column,
                            severity=o.severity,
                            rule_id=o.cop_name,
                            message=o.message,
                        )
                        for o in f.offenses
                    ),
                )
                for f in self.files
            ),
        )
