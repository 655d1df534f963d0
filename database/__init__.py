"""Database package: connection registry and its errors."""

from database.connection import (
    BorrowedConnection,
    ConnectionRegistry,
    MysqlCredentials,
    OwnedConnection,
)
from database.exceptions import (
    ConnectionFailedError,
    CredentialsMissingError,
    DatabaseError,
    ExternalConnectionMissingError,
    InvalidTimestampError,
)

__all__ = [
    "BorrowedConnection",
    "ConnectionFailedError",
    "ConnectionRegistry",
    "CredentialsMissingError",
    "DatabaseError",
    "ExternalConnectionMissingError",
    "InvalidTimestampError",
    "MysqlCredentials",
    "OwnedConnection",
]
