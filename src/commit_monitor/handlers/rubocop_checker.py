"""Commit-range handler: lint the changed lines of a pull request.

Pipeline, per invocation::

    diff → classify ─empty→ done
                    └→ analyze → filter ─zero offenses→ done
                                        └→ format → publish

Short circuits are successes with their own outcome; any stage
failure is logged and re-raised, and nothing is published.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from commit_monitor.analysis.classifier import filter_lintable
from commit_monitor.analysis.filtering import filter_findings
from commit_monitor.analysis.runner import AnalysisRunner
from commit_monitor.analysis.schemas import FindingSet
from commit_monitor.config import Settings
from commit_monitor.constants import BranchMode, ReviewOutcome, ReviewStage
from commit_monitor.errors import CommitMonitorError
from commit_monitor.git.repository import GitRepository
from commit_monitor.git.schemas import BranchRecord, CommitRange
from commit_monitor.logger import StageLogger
from commit_monitor.protocols import RepositorySource, RuleResolver
from commit_monitor.publish.publisher import Publisher
from commit_monitor.report.formatter import Report, format_report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewResult:
    """What one review run ended with."""

    outcome: ReviewOutcome
    report: Report | None = None
    finding_set: FindingSet | None = None

    @property
    def published(self) -> bool:
        return self.outcome == ReviewOutcome.PUBLISHED


class RubocopChecker:
    """Reviews pull-request commit ranges with RuboCop."""

    handled_branch_modes = frozenset({BranchMode.PR, BranchMode.LOCAL})

    def __init__(
        self,
        settings: Settings,
        *,
        publisher: Publisher | None = None,
        rule_catalog: RuleResolver | None = None,
        repository_factory: Callable[[Path], RepositorySource] = GitRepository,
    ) -> None:
        self._settings = settings
        self._publisher = publisher
        self._rule_catalog = rule_catalog
        self._repository_factory = repository_factory

    async def perform(
        self, branch: BranchRecord, commits: Sequence[str]
    ) -> ReviewResult:
        """Entry point for a commit-range event on ``branch``.

        Regular branches are skipped. Local runs are reviewed but have
        no pull request, so they end in a report rather than a comment.
        """
        if branch.mode not in self.handled_branch_modes:
            logger.info(
                "event=review_skipped reason=not_pull_request branch=%s",
                branch.name,
            )
            return ReviewResult(outcome=ReviewOutcome.SKIPPED_NOT_PULL_REQUEST)

        commit_range = CommitRange.from_commits(commits)
        repository = self._repository_factory(branch.repo_path)
        return await self.review(repository, branch, commit_range)

    async def review(
        self,
        repository: RepositorySource,
        branch: BranchRecord,
        commit_range: CommitRange,
    ) -> ReviewResult:
        """Run the full pipeline for ``commit_range``."""
        log = StageLogger(logger, commit_range=str(commit_range))
        stage = ReviewStage.DIFF
        try:
            diff_details = await repository.diff_details(commit_range)

            stage = ReviewStage.CLASSIFY
            diff_details = filter_lintable(
                diff_details,
                self._settings.lintable_extensions,
                self._settings.lintable_filenames,
            )
            if not diff_details:
                log.for_stage(stage).info("event=review_no_relevant_files")
                return ReviewResult(outcome=ReviewOutcome.NO_RELEVANT_FILES)

            stage = ReviewStage.ANALYZE
            runner = AnalysisRunner(repository, self._settings)
            results = await runner.run(
                commit_range.last, sorted(diff_details)
            )

            stage = ReviewStage.FILTER
            results = filter_findings(results, diff_details)
            log.for_stage(stage).info(
                "event=findings_filtered reported=%s remaining=%d",
                results.reported_offense_count,
                results.offense_count,
            )
            if results.offense_count == 0:
                log.for_stage(stage).info("event=review_clean")
                return ReviewResult(
                    outcome=ReviewOutcome.CLEAN, finding_set=results
                )

            stage = ReviewStage.FORMAT
            report = format_report(
                results,
                commit_range,
                self._commit_uri_resolver(branch),
                self._rule_catalog,
            )

            pull_request = branch.pull_request
            if self._publisher is None or pull_request is None:
                log.for_stage(stage).info(
                    "event=review_reported offenses=%d", results.offense_count
                )
                return ReviewResult(
                    outcome=ReviewOutcome.REPORTED,
                    report=report,
                    finding_set=results,
                )

            stage = ReviewStage.PUBLISH
            await self._publisher.publish(pull_request, report)
        except CommitMonitorError as exc:
            log.for_stage(stage).error(
                "event=review_failed error_type=%s error=%s",
                type(exc).__name__,
                exc,
            )
            raise

        log.for_stage(stage).info(
            "event=review_published offenses=%d", results.offense_count
        )
        return ReviewResult(
            outcome=ReviewOutcome.PUBLISHED,
            report=report,
            finding_set=results,
        )

    def _commit_uri_resolver(
        self, branch: BranchRecord
    ) -> Callable[[str], str]:
        template = self._settings.commit_uri_template

        def _resolve(commit: str) -> str:
            return branch.commit_uri_to(commit, template)

        return _resolve
