"""Tests for the cop-name → documentation lookup table."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import yaml

from commit_monitor.analysis.rule_catalog import (
    RuleCatalog,
    doc_uri_for,
    load_rule_catalog,
)
from commit_monitor.config import Settings

BASE = "https://docs.rubocop.org/rubocop"

SHOW_COPS = """\
# Available cops (480) + config for /repo:
# Department 'Layout' (100):
Layout/LineLength:
  Description: Checks that line length does not exceed the configured limit.
  Enabled: true
  Max: 120

# Department 'Style' (280):
Style/StringLiterals:
  Description: Checks if uses of quotes match the configured preference.
  Enabled: true

RSpec/Rails/HttpStatus:
  Description: Enforces use of symbolic or numeric value to describe HTTP status.
  Enabled: true

Rails/HttpStatus:
  Description: Enforces use of symbolic or numeric value to define HTTP status.
  Enabled: true
"""


def test_doc_uri_for_single_department() -> None:
    assert (
        doc_uri_for("Style/StringLiterals", BASE)
        == f"{BASE}/cops_style.html#stylestringliterals"
    )


def test_doc_uri_for_nested_department() -> None:
    assert (
        doc_uri_for("RSpec/Rails/HttpStatus", BASE)
        == f"{BASE}/cops_rspec_rails.html#rspecrailshttpstatus"
    )


class TestRuleCatalog:
    def test_resolves_qualified_and_unique_bare_names(self) -> None:
        catalog = RuleCatalog.from_yaml(SHOW_COPS, BASE)

        assert catalog.resolve_doc_uri("Layout/LineLength") == (
            f"{BASE}/cops_layout.html#layoutlinelength"
        )
        assert catalog.resolve_doc_uri("LineLength") == (
            f"{BASE}/cops_layout.html#layoutlinelength"
        )
        assert "StringLiterals" in catalog

    def test_ambiguous_bare_name_not_found(self) -> None:
        catalog = RuleCatalog.from_yaml(SHOW_COPS, BASE)
        assert catalog.resolve_doc_uri("HttpStatus") is None
        assert catalog.resolve_doc_uri("Rails/HttpStatus") is not None

    def test_unknown_rule_not_found(self) -> None:
        catalog = RuleCatalog.from_yaml(SHOW_COPS, BASE)
        assert catalog.resolve_doc_uri("Custom/MyCop") is None

    def test_empty(self) -> None:
        catalog = RuleCatalog.empty()
        assert len(catalog) == 0
        assert catalog.resolve_doc_uri("Style/StringLiterals") is None

    def test_non_mapping_yaml_rejected(self) -> None:
        with pytest.raises(ValueError, match="YAML mapping"):
            RuleCatalog.from_yaml("- a\n- b\n", BASE)


_EXEC = "commit_monitor.analysis.rule_catalog.asyncio.create_subprocess_exec"


def _proc(stdout: str, returncode: int = 0) -> MagicMock:
    proc = MagicMock()
    proc.communicate = AsyncMock(return_value=(stdout.encode(), b""))
    proc.returncode = returncode
    return proc


class TestLoadRuleCatalog:
    async def test_loads_from_show_cops(self, settings: Settings) -> None:
        with patch(_EXEC, return_value=_proc(SHOW_COPS)) as mock_exec:
            catalog = await load_rule_catalog(settings)

        assert mock_exec.call_args.args[:2] == ("rubocop", "--show-cops")
        assert catalog.resolve_doc_uri("Style/StringLiterals") is not None

    async def test_missing_tool_yields_empty_catalog(
        self, settings: Settings, caplog: pytest.LogCaptureFixture
    ) -> None:
        with patch(_EXEC, side_effect=FileNotFoundError("rubocop")):
            catalog = await load_rule_catalog(settings)

        assert len(catalog) == 0
        assert "rule_catalog_unavailable" in caplog.text

    async def test_nonzero_exit_yields_empty_catalog(
        self, settings: Settings
    ) -> None:
        with patch(_EXEC, return_value=_proc("", 2)):
            catalog = await load_rule_catalog(settings)
        assert len(catalog) == 0

    async def test_unparseable_yaml_yields_empty_catalog(
        self, settings: Settings
    ) -> None:
        with patch(_EXEC, return_value=_proc("a: [unclosed")):
            catalog = await load_rule_catalog(settings)
        assert len(catalog) == 0


def test_show_cops_fixture_is_valid_yaml() -> None:
    assert len(yaml.safe_load(SHOW_COPS)) == 4
