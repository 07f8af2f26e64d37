"""Deliver a finished report to its pull request."""

from __future__ import annotations

import logging

from commit_monitor.errors import PublishError, classify_error
from commit_monitor.git.schemas import PullRequestRef
from commit_monitor.protocols import PullRequestCommentSink
from commit_monitor.report.formatter import Report

logger = logging.getLogger(__name__)


class Publisher:
    """Posts reports through a comment sink. Never retries."""

    def __init__(self, sink: PullRequestCommentSink) -> None:
        self._sink = sink

    async def publish(
        self, pull_request: PullRequestRef, report: Report | str
    ) -> None:
        body = report.text if isinstance(report, Report) else report
        logger.info(
            "event=publish_started pull_request=%s lines=%d",
            pull_request,
            body.count("\n"),
        )
        try:
            await self._sink.post_comment(pull_request, body)
        except PublishError as exc:
            logger.error(
                "event=publish_failed pull_request=%s error_class=%s error=%s",
                pull_request,
                classify_error(exc).value,
                exc,
            )
            raise
        except Exception as exc:
            logger.error(
                "event=publish_failed pull_request=%s error_class=%s error=%s",
                pull_request,
                classify_error(exc).value,
                exc,
            )
            raise PublishError(
                f"Unable to publish to {pull_request}: {exc}",
                status_code=getattr(exc, "status_code", None),
            ) from exc
        logger.info("event=published pull_request=%s", pull_request)
