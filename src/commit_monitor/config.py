"""Environment-based configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

from commit_monitor.constants import LINTABLE_EXTENSIONS, LINTABLE_FILENAMES

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from .env file and environment variables."""

    # GitHub
    github_api_url: str = "https://api.github.com"
    github_token: str = ""
    github_timeout_seconds: float = 30.0

    # Commit links rendered in report headers
    commit_uri_template: str = "https://github.com/{repo}/commit/{sha}"

    # RuboCop
    rubocop_command: str = "rubocop"
    rubocop_config: Path = Path("config/rubocop_checker.yml")
    rule_doc_base_url: str = "https://docs.rubocop.org/rubocop"

    # Files handed to RuboCop
    lintable_extensions: Annotated[list[str], NoDecode] = list(
        LINTABLE_EXTENSIONS
    )
    lintable_filenames: Annotated[list[str], NoDecode] = list(
        LINTABLE_FILENAMES
    )

    # Logging
    log_level: str = "INFO"

    @field_validator(
        "lintable_extensions", "lintable_filenames", mode="before"
    )
    @classmethod
    def _parse_list(cls, v: Any) -> Any:
        """Accept comma-separated string or JSON array."""
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("lintable_extensions")
    @classmethod
    def _validate_extensions(cls, v: list[str]) -> list[str]:
        bad = [ext for ext in v if not ext.startswith(".")]
        if bad:
            raise ValueError(
                f"lintable_extensions must start with '.': {', '.join(bad)}"
            )
        return v

    @field_validator("rubocop_config")
    @classmethod
    def _absolute_config(cls, v: Path) -> Path:
        """Resolve against our cwd; RuboCop itself runs in the target repo."""
        return v.expanduser().resolve()

    @field_validator("github_api_url", "rule_doc_base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("commit_uri_template")
    @classmethod
    def _validate_template(cls, v: str) -> str:
        if "{sha}" not in v:
            logger.warning(
                "COMMIT_URI_TEMPLATE has no {sha} placeholder: %s", v
            )
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "",
        "extra": "ignore",
    }
