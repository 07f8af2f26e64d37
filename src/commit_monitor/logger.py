"""Context-scoped structured logging for review runs."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any

__all__ = ["StageLogger"]


class StageLogger(logging.LoggerAdapter):  # type: ignore[type-arg]
    """Logger adapter that stamps stage and commit range on each record.

    Messages follow the ``event=<name> key=value`` convention; the
    bound fields are appended to the message and also attached to
    the record as attributes so handlers can pick them up.

    Usage::

        log = StageLogger(logger, commit_range="abc..def")
        log.for_stage("analyze").info("event=tool_started files=%d", 3)
    """

    def __init__(
        self,
        logger: logging.Logger,
        *,
        commit_range: str,
        stage: str = "",
    ) -> None:
        super().__init__(
            logger, {"commit_range": commit_range, "stage": stage}
        )

    def for_stage(self, stage: str) -> StageLogger:
        """Return a sibling adapter bound to another stage."""
        return StageLogger(
            self.logger,
            commit_range=str(self.fields["commit_range"]),
            stage=stage,
        )

    @property
    def fields(self) -> dict[str, object]:
        return dict(self.extra or {})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        fields = self.fields
        kwargs["extra"] = {**fields, **(kwargs.get("extra") or {})}
        suffix = " ".join(
            f"{key}={value}" for key, value in fields.items() if value
        )
        return (f"{msg} {suffix}" if suffix else msg), kwargs
