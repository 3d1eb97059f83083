"""Shared test fixtures for outparsers tests."""

from __future__ import annotations

import textwrap

import pytest

from outparsers import RegexDictParser


# =============================================================================
# Parser Fixtures
# =============================================================================


@pytest.fixture
def react_keys() -> dict:
    """Key to label mapping of a ReAct style agent."""
    return {"action": "Action", "input": "Action Input"}


@pytest.fixture
def react_parser(react_keys) -> RegexDictParser:
    """Regex dict parser for ReAct output with "N/A" as the no-update value."""
    return RegexDictParser(react_keys, no_update_value="N/A")


@pytest.fixture
def status_parser() -> RegexDictParser:
    """Single-key parser with "NO_CHANGE" as the no-update value."""
    return RegexDictParser({"status": "Status"}, no_update_value="NO_CHANGE")


# =============================================================================
# Config Fixtures
# =============================================================================


@pytest.fixture
def config_file(tmp_path):
    """Write a config.yaml with a regex dict parser and a simple parser."""
    path = tmp_path / "config.yaml"
    path.write_text(
        textwrap.dedent(
            """\
            parsers:
              react:
                type: regex_dict
                output_key_to_format:
                  action: Action
                  input: Action Input
                no_update_value: "N/A"
              plain:
                type: simple
            logging:
              level: WARNING
            """
        )
    )
    return path
