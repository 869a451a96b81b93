"""Tests for the phonolo CLI.

All commands run through Click's CliRunner against the bundled Hayes
system or a small table written to tmp_path. Logging setup is patched
out so runs do not reconfigure the root logger.

Every subcommand is tested for:
    - Happy path with default and custom options
    - Error handling (unknown segments, bad arguments)
    - Output formats (text, json)
"""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from phonolo.cli import main


ENGLISH_STOPS = "p b t d k ɡ"


# ===========================================================================
# Helpers
# ===========================================================================


@pytest.fixture
def runner():
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _no_logging_setup():
    with patch("phonolo.cli.setup_logging") as setup:
        yield setup


@pytest.fixture
def table_file(tmp_path, voicing_table):
    path = tmp_path / "voicing.json"
    path.write_text(json.dumps(voicing_table), encoding="utf-8")
    return str(path)


# ===========================================================================
# main group
# ===========================================================================


class TestMain:

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("inventory", "query", "values", "parse"):
            assert command in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_log_level_passed_to_setup(self, runner, _no_logging_setup):
        result = runner.invoke(main, ["--log-level", "DEBUG", "values", "voice"])
        assert result.exit_code == 0
        _no_logging_setup.assert_called_once_with("DEBUG")

    def test_invalid_log_level(self, runner):
        result = runner.invoke(main, ["--log-level", "LOUD", "values", "voice"])
        assert result.exit_code == 2


# ===========================================================================
# inventory
# ===========================================================================


class TestInventoryCommand:

    def test_feature_system(self, runner):
        result = runner.invoke(main, ["inventory"])
        assert result.exit_code == 0
        assert "Feature system: 54 segments" in result.output
        assert "Features (26):" in result.output

    def test_derived(self, runner):
        result = runner.invoke(main, ["inventory", "--segments", ENGLISH_STOPS])
        assert result.exit_code == 0
        assert "Derived inventory: 6 segments" in result.output
        assert "Segments (6): p b t d k ɡ" in result.output

    def test_comma_separated_segments(self, runner):
        result = runner.invoke(main, ["inventory", "-s", "p,b"])
        assert result.exit_code == 0
        assert "Segments (2): p b" in result.output
        assert "Features (1): voice" in result.output

    def test_no_distinctive(self, runner):
        result = runner.invoke(main, ["inventory", "-s", "p,b", "--no-distinctive"])
        assert result.exit_code == 0
        assert "Features (26):" in result.output

    def test_json(self, runner):
        result = runner.invoke(main, ["inventory", "-s", "p b", "-f", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["root"] is False
        assert data["features"] == ["voice"]
        assert [s["symbol"] for s in data["segments"]] == ["p", "b"]

    def test_table_file(self, runner, table_file):
        result = runner.invoke(main, ["inventory", "--table", table_file])
        assert result.exit_code == 0
        assert "Feature system: 2 segments" in result.output

    def test_missing_table_file(self, runner, tmp_path):
        result = runner.invoke(main, ["inventory", "-t", str(tmp_path / "none.csv")])
        assert result.exit_code == 2

    def test_unknown_segment(self, runner):
        result = runner.invoke(main, ["inventory", "-s", "p q"])
        assert result.exit_code == 1
        assert "Unknown segment" in result.output

    def test_unknown_system(self, runner):
        result = runner.invoke(main, ["inventory", "--system", "klingon"])
        assert result.exit_code == 1
        assert "Unknown feature system" in result.output


# ===========================================================================
# query / values
# ===========================================================================


class TestQueryCommand:

    def test_natural_class(self, runner):
        result = runner.invoke(main, ["query", "nasal=+"])
        assert result.exit_code == 0
        assert "Segments with [+nasal] (5): m n ɲ ŋ ɴ" in result.output

    def test_on_derived_inventory(self, runner):
        result = runner.invoke(
            main, ["query", "-s", ENGLISH_STOPS, "voice=+", "LABIAL=+"]
        )
        assert result.exit_code == 0
        assert "(1): b" in result.output

    def test_unknown_value_is_empty(self, runner):
        result = runner.invoke(main, ["query", "voice=?"])
        assert result.exit_code == 0
        assert "(0):" in result.output

    def test_json(self, runner):
        result = runner.invoke(main, ["query", "-f", "json", "nasal=+", "CORONAL=+"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["constraints"] == {"nasal": "+", "CORONAL": "+"}
        assert data["segments"] == ["n", "ɲ"]
        assert data["total"] == 2

    def test_malformed_constraint(self, runner):
        result = runner.invoke(main, ["query", "voice"])
        assert result.exit_code == 2
        assert "FEATURE=VALUE" in result.output

    def test_no_constraints_lists_everything(self, runner):
        result = runner.invoke(main, ["query", "-s", "p b"])
        assert result.exit_code == 0
        assert "Segments with [] (2): p b" in result.output


class TestValuesCommand:

    def test_values(self, runner):
        result = runner.invoke(main, ["values", "voice"])
        assert result.exit_code == 0
        assert "voice: - +" in result.output

    def test_unknown_feature(self, runner):
        result = runner.invoke(main, ["values", "tone"])
        assert result.exit_code == 0
        assert "tone: no values in this inventory" in result.output

    def test_json(self, runner):
        result = runner.invoke(main, ["values", "round", "-f", "json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"feature": "round", "values": ["-", "0", "+"]}


# ===========================================================================
# parse
# ===========================================================================


class TestParseCommand:

    def test_parse(self, runner):
        result = runner.invoke(main, ["parse", "d͡ʒʌmps"])
        assert result.exit_code == 0
        assert "d͡ʒʌmps: d͡ʒ ʌ m p s" in result.output

    def test_multiple_texts(self, runner, table_file):
        result = runner.invoke(main, ["parse", "-t", table_file, "pb", "b p"])
        assert result.exit_code == 0
        assert "pb: p b" in result.output
        assert "b p: b p" in result.output

    def test_json(self, runner, table_file):
        result = runner.invoke(main, ["parse", "-t", table_file, "-f", "json", "bp"])
        assert result.exit_code == 0
        assert json.loads(result.output) == [{"text": "bp", "segments": ["b", "p"]}]

    def test_unparseable(self, runner, table_file):
        result = runner.invoke(main, ["parse", "-t", table_file, "px"])
        assert result.exit_code == 1
        assert "position 1" in result.output

    def test_requires_text(self, runner):
        result = runner.invoke(main, ["parse"])
        assert result.exit_code == 2
