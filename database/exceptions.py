"""Exception classes raised by the connection registry."""

from __future__ import annotations


class DatabaseError(Exception):
    """Base registry error with an associated HTTP status code."""

    status_code: int = 500
    default_message: str = "Database error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class CredentialsMissingError(DatabaseError):
    status_code = 400
    default_message = "MySQL credentials not provided!"


class ConnectionFailedError(DatabaseError):
    """The driver could not open a connection; message is the driver's own."""

    status_code = 503
    default_message = "MySQL connection failed"


class ExternalConnectionMissingError(DatabaseError):
    status_code = 400
    default_message = "MySQL external connection not provided!"


class InvalidTimestampError(DatabaseError):
    status_code = 400
    default_message = "Invalid timestamp"
