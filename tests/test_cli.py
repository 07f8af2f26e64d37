"""Tests for CLI argument parsing and the review command."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from commit_monitor.cli import _build_parser, main
from commit_monitor.constants import BranchMode, ReviewOutcome
from commit_monitor.errors import RepositoryError
from commit_monitor.handlers.rubocop_checker import ReviewResult
from commit_monitor.report.formatter import Report


class TestArgParser:
    def test_version_flag(self) -> None:
        args = _build_parser().parse_args(["--version"])
        assert args.version is True

    def test_review_defaults(self) -> None:
        args = _build_parser().parse_args(["review", "/tmp/repo", "abc"])
        assert args.command == "review"
        assert args.repo_path == "/tmp/repo"
        assert args.first == "abc"
        assert args.last is None
        assert args.pr is None
        assert args.dry_run is False
        assert args.no_rule_links is False

    def test_review_with_options(self) -> None:
        args = _build_parser().parse_args(
            [
                "review",
                "/tmp/repo",
                "abc",
                "def",
                "--repo-name",
                "acme/widgets",
                "--pr",
                "42",
                "--dry-run",
                "--no-rule-links",
            ]
        )
        assert args.last == "def"
        assert args.repo_name == "acme/widgets"
        assert args.pr == 42
        assert args.dry_run is True
        assert args.no_rule_links is True

    def test_no_command_prints_help(self) -> None:
        args = _build_parser().parse_args([])
        assert args.command is None


_PERFORM = "commit_monitor.cli.RubocopChecker.perform"


class TestReviewCommand:
    def test_missing_repo_exits_1(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["review", str(tmp_path / "missing"), "abc"])
        assert excinfo.value.code == 1
        assert "does not exist" in capsys.readouterr().err

    def test_pr_requires_repo_name(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["review", str(tmp_path), "abc", "--pr", "3"])
        assert excinfo.value.code == 1

    def test_dry_run_prints_report(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        result = ReviewResult(
            outcome=ReviewOutcome.REPORTED,
            report=Report(lines=("Checked commit x", "1 file checked")),
        )
        with (
            patch(_PERFORM, new=AsyncMock(return_value=result)) as perform,
            pytest.raises(SystemExit) as excinfo,
        ):
            main(["review", str(tmp_path), "abc", "--no-rule-links"])

        assert excinfo.value.code == 0
        assert capsys.readouterr().out == "Checked commit x\n1 file checked\n"
        branch, commits = perform.call_args.args
        assert commits == ["abc"]
        assert branch.repo_path == tmp_path.resolve()
        assert branch.mode == BranchMode.LOCAL
        assert branch.pull_request is None

    def test_short_circuit_prints_outcome(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        result = ReviewResult(outcome=ReviewOutcome.CLEAN)
        with (
            patch(_PERFORM, new=AsyncMock(return_value=result)),
            pytest.raises(SystemExit) as excinfo,
        ):
            main(["review", str(tmp_path), "abc", "def", "--no-rule-links"])

        assert excinfo.value.code == 0
        assert capsys.readouterr().out.strip() == "clean"

    def test_pipeline_error_exits_1(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with (
            patch(
                _PERFORM,
                new=AsyncMock(side_effect=RepositoryError("Unresolvable commit")),
            ),
            pytest.raises(SystemExit) as excinfo,
        ):
            main(["review", str(tmp_path), "abc", "--no-rule-links"])

        assert excinfo.value.code == 1
        assert "Unresolvable commit" in capsys.readouterr().err

    def test_pr_option_targets_pull_request(self, tmp_path: Path) -> None:
        result = ReviewResult(outcome=ReviewOutcome.PUBLISHED)
        with (
            patch(_PERFORM, new=AsyncMock(return_value=result)) as perform,
            pytest.raises(SystemExit) as excinfo,
        ):
            main(
                [
                    "review",
                    str(tmp_path),
                    "abc",
                    "--repo-name",
                    "acme/widgets",
                    "--pr",
                    "7",
                    "--no-rule-links",
                ]
            )

        assert excinfo.value.code == 0
        branch, _ = perform.call_args.args
        assert branch.mode == BranchMode.PR
        assert str(branch.pull_request) == "acme/widgets#7"
