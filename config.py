"""Application configuration loaded from environment variables."""

from __future__ import annotations

import logging
import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, model_validator

load_dotenv()

logger = logging.getLogger(__name__)


class Config(BaseModel):
    """Centralised app configuration backed by env vars."""

    # MySQL
    mysql_host: str = ""
    mysql_port: int = 3306
    mysql_database: str = ""
    mysql_user: str = ""
    mysql_password: str = ""
    mysql_table_prefix: str | None = None
    mysql_encoding: str = "utf8mb4"
    mysql_connect_timeout: int = 10

    # Logging
    log_level: str = "INFO"

    # Flask
    flask_host: str = "127.0.0.1"
    flask_port: int = 5000

    @model_validator(mode="after")
    def _warn_empty_critical_fields(self) -> Config:
        """Log warnings when critical connection fields are empty."""
        if self.mysql_host:
            if not self.mysql_database:
                logger.warning("MYSQL_DATABASE is not set; connecting will fail")
            if not self.mysql_user:
                logger.warning("MYSQL_USER is not set; connecting will fail")
        return self

    def mysql_credentials(self) -> dict[str, Any]:
        """Return the credential dict for the registry, or {} when no host is set."""
        if not self.mysql_host:
            return {}
        return {
            "host": self.mysql_host,
            "port": self.mysql_port,
            "database": self.mysql_database,
            "user": self.mysql_user,
            "password": self.mysql_password,
        }

    @classmethod
    def from_env(cls) -> Config:
        """Build config from environment variables."""
        return cls(
            mysql_host=os.getenv("MYSQL_HOST", ""),
            mysql_port=int(os.getenv("MYSQL_PORT", "3306")),
            mysql_database=os.getenv("MYSQL_DATABASE", ""),
            mysql_user=os.getenv("MYSQL_USER", ""),
            mysql_password=os.getenv("MYSQL_PASSWORD", ""),
            mysql_table_prefix=os.getenv("MYSQL_TABLE_PREFIX") or None,
            mysql_encoding=os.getenv("MYSQL_ENCODING", "utf8mb4"),
            mysql_connect_timeout=int(os.getenv("MYSQL_CONNECT_TIMEOUT", "10")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            flask_host=os.getenv("FLASK_HOST", "127.0.0.1"),
            flask_port=int(os.getenv("FLASK_PORT", "5000")),
        )


settings = Config.from_env()
