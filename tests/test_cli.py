"""Tests for the click CLI in main.py."""

from __future__ import annotations

from typing import Any

import pytest
from click.testing import CliRunner

import main
from config import Config
from tests.conftest import FakeConnector


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    monkeypatch.setattr(main, "setup_logging", lambda level="INFO": None)
    return CliRunner()


@pytest.fixture
def configured(monkeypatch: pytest.MonkeyPatch, credentials: dict[str, Any]) -> Config:
    cfg = Config(
        mysql_host=credentials["host"],
        mysql_database=credentials["database"],
        mysql_user=credentials["user"],
        mysql_password=credentials["password"],
        mysql_table_prefix="tg_",
    )
    monkeypatch.setattr(main, "settings", cfg)
    return cfg


class TestCheck:
    def test_success(
        self, runner: CliRunner, configured: Config, connector: FakeConnector
    ) -> None:
        result = runner.invoke(main.cli, ["check"])
        assert result.exit_code == 0
        assert "Connected to db.example.test/telegram" in result.output
        assert "Server version: 8.0.36" in result.output
        assert "Table prefix:   tg_" in result.output
        assert connector.calls[0]["connect_timeout"] == 10
        connector.connections[0].close.assert_called_once()

    def test_missing_credentials(
        self,
        runner: CliRunner,
        monkeypatch: pytest.MonkeyPatch,
        connector: FakeConnector,
    ) -> None:
        monkeypatch.setattr(main, "settings", Config())
        result = runner.invoke(main.cli, ["check"])
        assert result.exit_code == 1
        assert "MySQL credentials not provided!" in result.output
        assert connector.calls == []

    def test_connection_failure(
        self,
        runner: CliRunner,
        configured: Config,
        failing_connector: FakeConnector,
    ) -> None:
        result = runner.invoke(main.cli, ["check"])
        assert result.exit_code == 1
        assert "Can't connect to MySQL server" in result.output


class TestTimestampCommand:
    def test_epoch(self, runner: CliRunner, utc_timezone: None) -> None:
        result = runner.invoke(main.cli, ["timestamp", "1609459200"])
        assert result.exit_code == 0
        assert result.output.strip() == "2021-01-01 00:00:00"

    def test_now(self, runner: CliRunner) -> None:
        result = runner.invoke(main.cli, ["timestamp"])
        assert result.exit_code == 0
        assert len(result.output.strip()) == 19

    def test_out_of_range(self, runner: CliRunner) -> None:
        result = runner.invoke(main.cli, ["timestamp", "1e20"])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_negative_epoch_after_separator(
        self, runner: CliRunner, utc_timezone: None
    ) -> None:
        result = runner.invoke(main.cli, ["timestamp", "--", "-1"])
        assert result.exit_code == 0
        assert result.output.strip() == "1969-12-31 23:59:59"
