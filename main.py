"""CLI entry point for the MySQL connection registry."""

from __future__ import annotations

import logging
import sys

import click

from config import settings
from database import ConnectionRegistry, DatabaseError
from utils.timestamps import format_timestamp

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once; later calls are no-ops."""
    root = logging.getLogger()
    if root.handlers:
        return
    root.setLevel(level)
    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    root.addHandler(console)


def build_registry() -> ConnectionRegistry:
    """Connect a fresh registry using the configured credentials."""
    registry = ConnectionRegistry(connect_timeout=settings.mysql_connect_timeout)
    registry.initialize_from_credentials(
        settings.mysql_credentials(),
        table_prefix=settings.mysql_table_prefix,
        encoding=settings.mysql_encoding,
    )
    return registry


@click.group()
def cli() -> None:
    """MySQL connection registry."""
    setup_logging(settings.log_level)


@cli.command()
def check() -> None:
    """Connect with the configured credentials and report the server."""
    try:
        registry = build_registry()
    except DatabaseError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    try:
        conn = registry.get_connection()
        print(f"Connected to {settings.mysql_host}/{settings.mysql_database}")
        print(f"Server version: {conn.get_server_info()}")
        print(f"Table prefix:   {registry.table_prefix or '(none)'}")
        print(f"Checked at:     {format_timestamp()}")
    finally:
        registry.close()


@cli.command()
@click.argument("epoch", type=float, required=False)
def timestamp(epoch: float | None) -> None:
    """Print EPOCH (or now) as YYYY-MM-DD HH:MM:SS local time.

    Negative epochs must follow "--", e.g. "timestamp -- -1".
    """
    try:
        print(format_timestamp(epoch))
    except DatabaseError as exc:
        print(f"Error: {exc}")
        sys.exit(1)


@cli.command()
def web() -> None:
    """Start the Flask status API."""
    from api.app import create_app

    try:
        registry = build_registry()
    except DatabaseError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    app = create_app(registry)
    try:
        app.run(host=settings.flask_host, port=settings.flask_port, debug=False)
    finally:
        registry.close()


if __name__ == "__main__":
    cli()
