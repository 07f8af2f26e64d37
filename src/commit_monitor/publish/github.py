"""GitHub issue-comment sink over httpx."""

from __future__ import annotations

import logging

import httpx

from commit_monitor.config import Settings
from commit_monitor.errors import PublishError
from commit_monitor.git.schemas import PullRequestRef

logger = logging.getLogger(__name__)


class GitHubCommentSink:
    """Posts comments to a pull request's conversation.

    Pull requests share the issues comment endpoint, so the
    comment lands in the PR's main timeline.
    """

    def __init__(
        self,
        settings: Settings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._client = client

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._settings.github_token:
            headers["Authorization"] = f"Bearer {self._settings.github_token}"
        return headers

    def _url(self, pull_request: PullRequestRef) -> str:
        return (
            f"{self._settings.github_api_url}/repos/{pull_request.repo_name}"
            f"/issues/{pull_request.number}/comments"
        )

    async def post_comment(
        self, pull_request: PullRequestRef, body: str
    ) -> None:
        """Create one comment; raise PublishError on any failure."""
        if self._client is not None:
            await self._post(self._client, pull_request, body)
            return
        async with httpx.AsyncClient(
            timeout=self._settings.github_timeout_seconds
        ) as client:
            await self._post(client, pull_request, body)

    async def _post(
        self,
        client: httpx.AsyncClient,
        pull_request: PullRequestRef,
        body: str,
    ) -> None:
        try:
            response = await client.post(
                self._url(pull_request),
                json={"body": body},
                headers=self._headers(),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise PublishError(
                f"GitHub rejected comment on {pull_request}: "
                f"{exc.response.status_code} {exc.response.reason_phrase}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise PublishError(
                f"Unable to reach GitHub for {pull_request}: {exc}"
            ) from exc
        logger.debug(
            "event=comment_created pull_request=%s status=%d",
            pull_request,
            response.status_code,
        )
