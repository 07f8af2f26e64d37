"""Shared test fixtures — settings, findings, RuboCop payloads."""

import os

# Never talk to the real GitHub from tests, whatever the shell exports.
os.environ["GITHUB_TOKEN"] = "for-demo-purposes-only"

import json
from pathlib import Path
from typing import Any

import pytest

from commit_monitor.analysis.schemas import FileFindings, Finding, FindingSet
from commit_monitor.config import Settings
from commit_monitor.git.schemas import BranchRecord


def make_finding(
    file_path: str = "a.rb",
    line: int = 1,
    column: int = 1,
    severity: str = "convention",
    rule_id: str = "Style/StringLiterals",
    message: str = "Prefer double-quoted strings.",
) -> Finding:
    return Finding(
        file_path=file_path,
        line=line,
        column=column,
        severity=severity,
        rule_id=rule_id,
        message=message,
    )


def make_finding_set(
    findings: list[Finding], target_file_count: int | None = None
) -> FindingSet:
    """Group findings by path into a FindingSet."""
    by_path: dict[str, list[Finding]] = {}
    for finding in findings:
        by_path.setdefault(finding.file_path, []).append(finding)
    return FindingSet(
        target_file_count=(
            len(by_path) if target_file_count is None else target_file_count
        ),
        files=tuple(
            FileFindings(path=path, findings=tuple(items))
            for path, items in by_path.items()
        ),
        reported_offense_count=len(findings),
    )


def rubocop_payload(
    files: dict[str, list[dict[str, Any]]],
    target_file_count: int | None = None,
) -> str:
    """Serialize a ``rubocop --format json`` document."""
    count = sum(len(offenses) for offenses in files.values())
    return json.dumps({
        "metadata": {"rubocop_version": "1.65.0"},
        "files": [
            {"path": path, "offenses": offenses}
            for path, offenses in files.items()
        ],
        "summary": {
            "offense_count": count,
            "target_file_count": (
                len(files) if target_file_count is None else target_file_count
            ),
            "inspected_file_count": len(files),
        },
    })


def offense(
    line: int,
    severity: str = "convention",
    cop_name: str = "Style/StringLiterals",
    column: int = 1,
    message: str = "Prefer double-quoted strings.",
) -> dict[str, Any]:
    return {
        "severity": severity,
        "message": message,
        "cop_name": cop_name,
        "corrected": False,
        "location": {
            "start_line": line,
            "start_column": column,
            "line": line,
            "column": column,
            "length": 3,
        },
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        github_api_url="https://github.example/api",
        github_token="test-token",
        commit_uri_template="https://github.com/{repo}/commit/{sha}",
    )


@pytest.fixture
def pr_branch(tmp_path: Path) -> BranchRecord:
    return BranchRecord(
        name="feature",
        repo_path=tmp_path,
        repo_name="acme/widgets",
        pr_number=42,
    )
