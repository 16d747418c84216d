"""Tests for the CLI."""

import json
from datetime import date, datetime
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from arkeo.adapters.base import ConnectorError
from arkeo.adapters.registry import ConnectorRegistry
from arkeo.cli import main
from arkeo.config import Config
from arkeo.core.activity import Timeline


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config():
    return Config(
        use_colors=False,
        enabled_connectors=["github"],
        connectors={"github": {"token": "ghp_secret", "username": "octocat"}},
    )


@pytest.fixture
def invoke(runner, config):
    def _invoke(*args):
        with patch("arkeo.cli.load_config", return_value=config):
            return runner.invoke(main, list(args))

    return _invoke


@pytest.fixture
def timeline(make_activity):
    return Timeline(
        date=date(2025, 1, 15),
        activities=[
            make_activity(datetime(2025, 1, 15, 9, 0), title="Fix login"),
            make_activity(datetime(2025, 1, 15, 10, 0), title="Review PR"),
        ],
    )


class TestTimeline:
    @patch("arkeo.cli.build_timeline")
    def test_day_table(self, mock_build, invoke, config, timeline):
        mock_build.return_value = timeline
        result = invoke("timeline", "--date", "2025-01-15")

        assert result.exit_code == 0
        assert "Timeline for Wednesday, January 15, 2025" in result.output
        assert "Fix login" in result.output
        mock_build.assert_called_once_with(config, date(2025, 1, 15))

    @patch("arkeo.cli.build_timeline")
    def test_csv_with_max(self, mock_build, invoke, timeline):
        mock_build.return_value = timeline
        result = invoke("timeline", "--format", "csv", "--max", "1")

        assert result.exit_code == 0
        lines = result.output.strip().split("\n")
        assert lines[0].startswith("timestamp,type,source")
        assert len(lines) == 2

    @patch("arkeo.cli.fetch_week")
    def test_week_json(self, mock_fetch, invoke, timeline):
        days = [date(2025, 1, d) for d in range(13, 18)]
        mock_fetch.return_value = (timeline.activities, days)
        result = invoke("timeline", "--week", "--format", "json", "--date", "2025-01-15")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["week_start"] == "2025-01-13"
        assert data["total_count"] == 2

    def test_invalid_format_option(self, invoke):
        result = invoke("timeline", "--format", "xml")
        assert result.exit_code != 0

    @patch("arkeo.cli.build_timeline")
    def test_bad_default_format_reports_error(self, mock_build, runner, timeline):
        mock_build.return_value = timeline
        with patch("arkeo.cli.load_config", return_value=Config(default_format="yaml")):
            result = runner.invoke(main, ["timeline"])

        assert result.exit_code == 1
        assert "Error: Unknown format 'yaml'" in result.output

    def test_malformed_config_reports_error(self, runner):
        with patch("arkeo.cli.load_config", side_effect=ValueError("invalid literal for int() with base 10: 'abc'")):
            result = runner.invoke(main, ["config", "validate"])

        assert result.exit_code == 1
        assert "Error: invalid" in result.output
        assert "abc" in result.output


class TestSummary:
    @patch("arkeo.cli.build_timeline")
    def test_summary(self, mock_build, invoke, timeline):
        mock_build.return_value = timeline
        result = invoke("summary", "--date", "2025-01-15")

        assert result.exit_code == 0
        assert "Total Activities: 2" in result.output
        assert "Time Range: 09:00 - 10:00" in result.output


class TestConnectors:
    def test_list(self, invoke):
        result = invoke("connectors", "list")
        assert result.exit_code == 0
        assert "✓ github" in result.output
        assert "webhooks" in result.output
        assert "macos_system" in result.output

    def test_info(self, invoke):
        result = invoke("connectors", "info", "github")
        assert result.exit_code == 0
        assert "Enabled: yes" in result.output
        assert "github.token" in result.output
        assert "(required)" in result.output

    def test_info_unknown(self, invoke):
        result = invoke("connectors", "info", "gitlab")
        assert result.exit_code == 1
        assert "unknown connector 'gitlab'" in result.output

    def test_test_invalid_config(self, runner):
        with patch("arkeo.cli.load_config", return_value=Config()):
            result = runner.invoke(main, ["connectors", "test", "github"])
        assert result.exit_code == 1
        assert "✗ github" in result.output

    @patch("arkeo.cli.build_registry")
    def test_test_success(self, mock_build, invoke):
        connector = MagicMock()
        connector.name = "github"
        registry = ConnectorRegistry()
        registry.register(connector)
        mock_build.return_value = registry

        result = invoke("connectors", "test", "github")

        assert result.exit_code == 0
        assert "✓ github: connection OK" in result.output
        connector.test_connection.assert_called_once()

    @patch("arkeo.cli.build_registry")
    def test_test_connection_failure(self, mock_build, invoke):
        connector = MagicMock()
        connector.name = "github"
        connector.test_connection.side_effect = ConnectorError("401 Unauthorized")
        registry = ConnectorRegistry()
        registry.register(connector)
        mock_build.return_value = registry

        result = invoke("connectors", "test", "github")

        assert result.exit_code == 1
        assert "401 Unauthorized" in result.output


class TestConfigCommands:
    def test_show_masks_secrets(self, invoke):
        result = invoke("config", "show")
        assert result.exit_code == 0
        assert "[github]" in result.output
        assert "octocat" in result.output
        assert "ghp_secret" not in result.output
        assert "********" in result.output

    def test_validate_ok(self, invoke):
        result = invoke("config", "validate")
        assert result.exit_code == 0
        assert "✓ github" in result.output
        assert "Configuration is valid." in result.output

    def test_validate_reports_errors(self, runner):
        config = Config(enabled_connectors=["github", "nope"], connectors={"github": {"username": "octocat"}})
        with patch("arkeo.cli.load_config", return_value=config):
            result = runner.invoke(main, ["config", "validate"])

        assert result.exit_code == 1
        assert "✗ github: required field 'token' is missing" in result.output
        assert "✗ nope: unknown connector" in result.output
