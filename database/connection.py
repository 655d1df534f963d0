"""MySQL connection registry.

A ``ConnectionRegistry`` holds at most one live PyMySQL connection for
whoever owns the registry object.  The handle is either opened by the
registry from a credential set (an *owned* connection) or handed in by
the caller (a *borrowed* connection).  Owned handles are closed by the
registry when they are replaced; borrowed handles are left to their owner.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Union

import pymysql
from pydantic import BaseModel
from pymysql.charset import charset_by_name

from database.exceptions import (
    ConnectionFailedError,
    CredentialsMissingError,
    ExternalConnectionMissingError,
)
from utils import timestamps

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf8mb4"
DEFAULT_PORT = 3306
REQUIRED_CREDENTIAL_KEYS = ("host", "database", "user", "password")


class MysqlCredentials(BaseModel):
    """Connection parameters for a self-managed connection."""

    host: str
    database: str
    user: str
    password: str
    port: int = DEFAULT_PORT


@dataclass(frozen=True)
class OwnedConnection:
    """A connection the registry opened and must release."""

    connection: Any
    credentials: dict[str, Any]
    table_prefix: str | None = None


@dataclass(frozen=True)
class BorrowedConnection:
    """A connection supplied by the caller, never closed by the registry."""

    connection: Any
    table_prefix: str | None = None
    credentials: dict[str, Any] = field(default_factory=dict)


RegistryState = Union[OwnedConnection, BorrowedConnection]


def _normalise_credentials(
    credentials: Mapping[str, Any] | MysqlCredentials | None,
) -> dict[str, Any]:
    """Return *credentials* as a plain dict, checking required keys.

    Raises CredentialsMissingError before any connection attempt.
    """
    if isinstance(credentials, MysqlCredentials):
        return credentials.model_dump()
    if not credentials:
        raise CredentialsMissingError()

    missing = [key for key in REQUIRED_CREDENTIAL_KEYS if key not in credentials]
    if missing:
        msg = f"MySQL credentials incomplete, missing: {', '.join(missing)}"
        raise CredentialsMissingError(msg)

    creds = dict(credentials)
    if creds.get("port") not in (None, ""):
        try:
            creds["port"] = int(creds["port"])
        except (TypeError, ValueError) as exc:
            msg = f"MySQL credentials invalid, bad port: {creds['port']!r}"
            raise CredentialsMissingError(msg) from exc
    return creds


def open_connection(
    credentials: Mapping[str, Any],
    encoding: str = DEFAULT_ENCODING,
    connect_timeout: int | None = None,
) -> pymysql.connections.Connection:
    """Open a PyMySQL connection from a validated credential dict.

    Raises ConnectionFailedError carrying the driver's message.
    """
    if charset_by_name(encoding) is None:
        raise ConnectionFailedError(f"Unknown character set: {encoding}")

    kwargs: dict[str, Any] = {
        "host": credentials["host"],
        "port": credentials.get("port") or DEFAULT_PORT,
        "user": credentials["user"],
        "password": credentials["password"],
        "database": credentials["database"],
        "charset": encoding,
        "init_command": f"SET NAMES {encoding}",
    }
    if connect_timeout is not None:
        kwargs["connect_timeout"] = connect_timeout

    try:
        return pymysql.connect(**kwargs)
    except (pymysql.MySQLError, OSError, ValueError, TypeError) as exc:
        logger.warning(
            "Could not connect to MySQL at %s/%s: %s",
            credentials["host"],
            credentials["database"],
            exc,
        )
        raise ConnectionFailedError(str(exc)) from exc


class ConnectionRegistry:
    """Caller-owned holder of a single database connection."""

    def __init__(self, connect_timeout: int | None = None) -> None:
        self._connect_timeout = connect_timeout
        self._state: RegistryState | None = None
        self._lock = threading.Lock()

    # --- Initialization ---

    def initialize_from_credentials(
        self,
        credentials: Mapping[str, Any] | MysqlCredentials | None,
        table_prefix: str | None = None,
        encoding: str = DEFAULT_ENCODING,
    ) -> pymysql.connections.Connection:
        """Open a new connection and make it the registry's handle.

        Raises CredentialsMissingError when *credentials* is empty or
        incomplete, ConnectionFailedError when the connect attempt fails.
        A failed call leaves the previous state untouched.
        """
        creds = _normalise_credentials(credentials)
        conn = open_connection(creds, encoding, self._connect_timeout)
        logger.info(
            "Connected to MySQL database %s on %s", creds["database"], creds["host"]
        )
        self._replace(OwnedConnection(conn, creds, table_prefix))
        return conn

    def initialize_from_existing_connection(
        self,
        external_connection: Any,
        table_prefix: str | None = None,
    ) -> Any:
        """Adopt a connection the caller already opened.

        Raises ExternalConnectionMissingError when *external_connection*
        is None.
        """
        if external_connection is None:
            raise ExternalConnectionMissingError()
        self._replace(BorrowedConnection(external_connection, table_prefix))
        return external_connection

    def _replace(self, new_state: RegistryState) -> None:
        with self._lock:
            old_state, self._state = self._state, new_state
        if old_state is not None:
            logger.info("Replaced existing database connection")
            self._release(old_state, keep=new_state.connection)

    @staticmethod
    def _release(state: RegistryState, keep: Any = None) -> None:
        """Close *state*'s handle if the registry owns it."""
        if not isinstance(state, OwnedConnection) or state.connection is keep:
            return
        try:
            state.connection.close()
        except pymysql.MySQLError as exc:
            # Already closed by the server
            logger.warning("Error closing previous connection: %s", exc)

    def close(self) -> None:
        """Reset the registry, closing the handle only when it is owned."""
        with self._lock:
            old_state, self._state = self._state, None
        if old_state is not None:
            self._release(old_state)

    # --- Accessors ---

    def is_connected(self) -> bool:
        return self._state is not None

    def get_connection(self) -> Any:
        """Return the stored handle, or None before initialization."""
        state = self._state
        return state.connection if state is not None else None

    @property
    def state(self) -> RegistryState | None:
        return self._state

    @property
    def credentials(self) -> dict[str, Any]:
        """Credentials of the last self-managed connection ({} otherwise)."""
        state = self._state
        return dict(state.credentials) if state is not None else {}

    @property
    def table_prefix(self) -> str | None:
        state = self._state
        return state.table_prefix if state is not None else None

    @property
    def owns_connection(self) -> bool:
        return isinstance(self._state, OwnedConnection)

    @staticmethod
    def format_timestamp(time: datetime | float | None = None) -> str:
        return timestamps.format_timestamp(time)
