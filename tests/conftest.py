"""Shared test fixtures."""

from __future__ import annotations

import os
import time
from collections.abc import Generator
from typing import Any
from unittest.mock import MagicMock

import pymysql
import pytest

from database.connection import ConnectionRegistry

SAMPLE_CREDENTIALS = {
    "host": "db.example.test",
    "database": "telegram",
    "user": "bot",
    "password": "s3cret",
}


class FakeConnector:
    """Stand-in for ``pymysql.connect`` recording every call."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.connections: list[MagicMock] = []
        self.error: Exception | None = None

    def __call__(self, **kwargs: Any) -> MagicMock:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        conn = MagicMock(name=f"conn{len(self.connections)}")
        conn.get_server_info.return_value = "8.0.36"
        self.connections.append(conn)
        return conn


@pytest.fixture
def connector(monkeypatch: pytest.MonkeyPatch) -> FakeConnector:
    """Replace pymysql.connect in the registry module with a recorder."""
    fake = FakeConnector()
    monkeypatch.setattr("database.connection.pymysql.connect", fake)
    return fake


@pytest.fixture
def failing_connector(connector: FakeConnector) -> FakeConnector:
    """Connector whose connect attempts fail like an unreachable server."""
    connector.error = pymysql.err.OperationalError(
        2003, "Can't connect to MySQL server on 'db.example.test'"
    )
    return connector


@pytest.fixture
def registry() -> Generator[ConnectionRegistry, None, None]:
    reg = ConnectionRegistry()
    yield reg
    reg.close()


@pytest.fixture
def credentials() -> dict[str, Any]:
    return dict(SAMPLE_CREDENTIALS)


@pytest.fixture
def utc_timezone() -> Generator[None, None, None]:
    """Run the test with the process time zone set to UTC."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "UTC"
    time.tzset()
    yield
    if previous is None:
        del os.environ["TZ"]
    else:
        os.environ["TZ"] = previous
    time.tzset()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove MySQL-related variables from the environment."""
    for key in list(os.environ):
        if key.startswith("MYSQL_"):
            monkeypatch.delenv(key)
    return monkeypatch
