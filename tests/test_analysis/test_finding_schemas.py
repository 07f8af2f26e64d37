"""Tests for Finding ordering and FindingSet counting."""

from __future__ import annotations

import math

from commit_monitor.analysis.schemas import FileFindings, FindingSet
from tests.conftest import make_finding


def test_severity_rank_follows_fixed_order() -> None:
    ranks = [
        make_finding(severity=s).severity_rank
        for s in ("fatal", "error", "warning", "convention", "refactor")
    ]
    assert ranks == sorted(ranks)
    assert ranks[0] == 0


def test_unknown_severity_ranks_last() -> None:
    assert make_finding(severity="info").severity_rank == math.inf


def test_offense_count_is_sum_of_file_findings() -> None:
    fs = FindingSet(
        target_file_count=3,
        files=(
            FileFindings(path="a.rb", findings=(make_finding(), make_finding())),
            FileFindings(path="b.rb"),
            FileFindings(path="c.rb", findings=(make_finding("c.rb"),)),
        ),
        reported_offense_count=99,
    )
    assert fs.offense_count == 3
