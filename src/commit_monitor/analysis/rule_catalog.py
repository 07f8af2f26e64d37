"""Static lookup table from RuboCop cop names to documentation links."""

from __future__ import annotations

import asyncio
import logging
import shlex
from collections import Counter
from collections.abc import Iterable
from typing import Any

import yaml

from commit_monitor.config import Settings

logger = logging.getLogger(__name__)


def doc_uri_for(qualified_name: str, base_url: str) -> str:
    """Documentation anchor for a ``Department/CopName`` cop.

    ``Style/StringLiterals`` →
    ``<base>/cops_style.html#stylestringliterals``.
    """
    *departments, _ = qualified_name.split("/")
    page = "_".join(d.lower() for d in departments)
    anchor = qualified_name.replace("/", "").lower()
    return f"{base_url}/cops_{page}.html#{anchor}"


class RuleCatalog:
    """Maps cop names to doc URIs; unknown names resolve to None.

    Both the qualified name (``Layout/LineLength``) and the bare cop
    name (``LineLength``) resolve, the latter only when no two
    departments share it.
    """

    def __init__(
        self, qualified_names: Iterable[str], base_url: str
    ) -> None:
        names = sorted({n for n in qualified_names if "/" in n})
        self._uris: dict[str, str] = {
            name: doc_uri_for(name, base_url) for name in names
        }
        bare = Counter(name.rsplit("/", 1)[1] for name in names)
        for name in names:
            short = name.rsplit("/", 1)[1]
            if bare[short] == 1:
                self._uris.setdefault(short, self._uris[name])

    @classmethod
    def empty(cls) -> RuleCatalog:
        return cls((), "")

    @classmethod
    def from_yaml(cls, text: str, base_url: str) -> RuleCatalog:
        """Build from ``rubocop --show-cops`` output."""
        data: Any = yaml.safe_load(text) or {}
        if not isinstance(data, dict):
            raise ValueError("cop catalog must be a YAML mapping")
        return cls((str(k) for k in data), base_url)

    def __len__(self) -> int:
        return len(self._uris)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._uris

    def resolve_doc_uri(self, rule_id: str) -> str | None:
        return self._uris.get(rule_id)


async def load_rule_catalog(settings: Settings) -> RuleCatalog:
    """Ask the installed RuboCop for its cops.

    Best-effort: any failure yields an empty catalog, which just
    means rules are rendered without links.
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *shlex.split(settings.rubocop_command),
            "--show-cops",
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, _ = await proc.communicate()
        if proc.returncode != 0:
            raise RuntimeError(f"exit status {proc.returncode}")
        catalog = RuleCatalog.from_yaml(
            stdout.decode(errors="replace"), settings.rule_doc_base_url
        )
    except (OSError, RuntimeError, ValueError, yaml.YAMLError) as exc:
        logger.warning("event=rule_catalog_unavailable error=%s", exc)
        return RuleCatalog.empty()
    logger.info("event=rule_catalog_loaded cops=%d", len(catalog))
    return catalog
