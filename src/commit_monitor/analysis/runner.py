"""Run RuboCop against a commit snapshot and parse its JSON report."""

from __future__ import annotations

import asyncio
import json
import logging
import shlex
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from commit_monitor.analysis.schemas import FindingSet, RubocopReport
from commit_monitor.config import Settings
from commit_monitor.constants import ERROR_TRUNCATION_CHARS
from commit_monitor.errors import AnalysisOutputError, AnalysisToolError
from commit_monitor.protocols import RepositorySource

logger = logging.getLogger(__name__)


def build_command(
    command: str, config: Path, file_paths: Sequence[str]
) -> list[str]:
    """RuboCop argv: config file, JSON formatter, then the targets."""
    return [
        *shlex.split(command),
        "--config",
        str(config),
        "--format",
        "json",
        *file_paths,
    ]


def parse_rubocop_output(text: str) -> FindingSet:
    """Parse ``rubocop --format json`` stdout into a FindingSet."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        snippet = text.strip()[:ERROR_TRUNCATION_CHARS]
        raise AnalysisOutputError(
            f"RuboCop output is not valid JSON: {exc}; got {snippet!r}"
        ) from exc
    try:
        report = RubocopReport.model_validate(payload)
    except ValidationError as exc:
        raise AnalysisOutputError(
            f"RuboCop output has unexpected shape: {exc}"
        ) from exc
    return report.to_finding_set()


class AnalysisRunner:
    """Executes RuboCop inside a temporary checkout of a commit."""

    def __init__(
        self, repository: RepositorySource, settings: Settings
    ) -> None:
        self._repository = repository
        self._settings = settings

    async def run(
        self, commit: str, file_paths: Sequence[str]
    ) -> FindingSet:
        """Check ``file_paths`` as they exist at ``commit``.

        RuboCop exits 1 both on crashes and when it merely found
        offenses, so the exit status is not trusted: anything on
        stderr is a failure, otherwise stdout is the result.
        """
        argv = build_command(
            self._settings.rubocop_command,
            self._settings.rubocop_config,
            file_paths,
        )
        async with self._repository.temporarily_checkout(commit) as cwd:
            logger.info("event=tool_exec command=%s", shlex.join(argv))
            try:
                proc = await asyncio.create_subprocess_exec(
                    *argv,
                    cwd=str(cwd),
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            except OSError as exc:
                raise AnalysisToolError(
                    f"Unable to start {argv[0]}: {exc}",
                    diagnostics=str(exc),
                ) from exc
            stdout, stderr = await proc.communicate()

        diagnostics = stderr.decode(errors="replace").strip()
        if diagnostics:
            raise AnalysisToolError(
                f"{argv[0]} exited {proc.returncode} with diagnostics: "
                f"{diagnostics[:ERROR_TRUNCATION_CHARS]}",
                diagnostics=diagnostics,
                exit_status=proc.returncode,
            )

        result = parse_rubocop_output(stdout.decode(errors="replace"))
        logger.info(
            "event=tool_finished exit_status=%s target_files=%d"
            " reported_offenses=%s",
            proc.returncode,
            result.target_file_count,
            result.reported_offense_count,
        )
        return result
