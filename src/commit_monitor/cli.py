"""CLI entry point — ``commit-monitor review``."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from commit_monitor import __version__
from commit_monitor.analysis.rule_catalog import load_rule_catalog
from commit_monitor.config import Settings
from commit_monitor.errors import CommitMonitorError
from commit_monitor.git.schemas import BranchRecord
from commit_monitor.handlers.rubocop_checker import ReviewResult, RubocopChecker
from commit_monitor.logging_config import setup_logging
from commit_monitor.publish.github import GitHubCommentSink
from commit_monitor.publish.publisher import Publisher


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"commit-monitor {__version__}")
        return

    if args.command == "review":
        sys.exit(_run_review(args))
    else:
        parser.print_help()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="commit-monitor",
        description=(
            "Review pull-request commit ranges with RuboCop and "
            "comment on the changed lines."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    review = sub.add_parser(
        "review",
        help="Review a commit range of a local repository",
    )
    review.add_argument(
        "repo_path",
        type=str,
        help="Path to local repository",
    )
    review.add_argument("first", help="First commit of the range")
    review.add_argument(
        "last",
        nargs="?",
        default=None,
        help="Last commit of the range (default: same as first)",
    )
    review.add_argument(
        "--repo-name",
        default="",
        help="GitHub repository as owner/name (used for links and comments)",
    )
    review.add_argument(
        "--pr",
        type=int,
        default=None,
        help="Pull request number to comment on",
    )
    review.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the report instead of publishing it",
    )
    review.add_argument(
        "--no-rule-links",
        action="store_true",
        help="Skip loading the cop catalog; render bare cop names",
    )

    return parser


def _run_review(args: argparse.Namespace) -> int:
    """Execute the review command; return the exit status."""
    settings = Settings()
    setup_logging(settings.log_level)

    repo_path = Path(args.repo_path).resolve()
    if not repo_path.is_dir():
        print(f"Error: {repo_path} does not exist", file=sys.stderr)
        return 1
    if args.pr is not None and not args.repo_name:
        print("Error: --pr requires --repo-name", file=sys.stderr)
        return 1

    branch = BranchRecord(
        name="HEAD",
        repo_path=repo_path,
        repo_name=args.repo_name or repo_path.name,
        pr_number=args.pr,
        local=args.pr is None,
    )
    commits = [args.first] if args.last is None else [args.first, args.last]

    try:
        result = asyncio.run(
            _review(settings, branch, commits, args)
        )
    except CommitMonitorError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if result.report is not None and not result.published:
        print(result.report.text, end="")
    else:
        print(result.outcome.value)
    return 0


async def _review(
    settings: Settings,
    branch: BranchRecord,
    commits: list[str],
    args: argparse.Namespace,
) -> ReviewResult:
    publisher = None
    if args.pr is not None and not args.dry_run:
        publisher = Publisher(GitHubCommentSink(settings))
    catalog = None if args.no_rule_links else await load_rule_catalog(settings)
    checker = RubocopChecker(
        settings, publisher=publisher, rule_catalog=catalog
    )
    return await checker.perform(branch, commits)
