"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for the users service.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m userserver --port 3000                          │
    │                                                                      │
    │   2. Environment variables (and a local .env file)                  │
    │      └── DATABASE_URL=postgresql://... python -m userserver        │
    │                                                                      │
    │   3. Defaults in this dataclass                                     │
    │      └── 0.0.0.0:8080, postgres on host "db"                       │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Only DATABASE_URL changes what the service talks to. The listening
address is fixed unless the CLI overrides it.

=============================================================================
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv


logger = logging.getLogger(__name__)


DEFAULT_DATABASE_URL = "postgresql://postgres:postgres@db:5432/postgres"


def normalize_database_url(url: str) -> str:
    """
    Make a database URL acceptable to SQLAlchemy.

    Heroku-style ``postgres://`` URLs are rejected by SQLAlchemy, which
    only knows the ``postgresql`` dialect name.
    """
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


@dataclass
class ServerConfig:
    """
    Configuration for the users server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, buffer_size, timeout

    DATABASE
    - database_url

    LOGGING
    - log_level

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "0.0.0.0"
    """All interfaces. The service is meant to run inside a container."""

    port: int = 8080

    backlog: int = 128
    """
    Maximum number of queued connections.
    Connections wait here while the single loop serves the current one.
    """

    buffer_size: int = 1024
    """
    Bytes read from each connection, in a single recv().
    Anything past this is dropped: bodies are truncated silently.
    """

    timeout: Optional[float] = 30.0
    """
    Socket timeout for reading and writing a client connection.
    None = blocking forever on a silent client.
    """

    # ─────────────────────────────────────────────────────────────────────
    # DATABASE
    # ─────────────────────────────────────────────────────────────────────

    database_url: str = DEFAULT_DATABASE_URL
    """SQLAlchemy URL of the database holding the users table."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"

    def __post_init__(self):
        self.database_url = normalize_database_url(self.database_url)

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        DATABASE_URL    Database connection URL
                        (default: postgresql://postgres:postgres@db:5432/postgres)
        LOG_LEVEL       Logging level (default: INFO)

        A .env file in the working directory is loaded first; variables
        already present in the environment win over it.

        =====================================================================
        """
        load_dotenv(find_dotenv(usecwd=True))

        database_url = os.getenv("DATABASE_URL")
        if not database_url:
            logger.info("DATABASE_URL is not set, using the default configuration")
            database_url = DEFAULT_DATABASE_URL

        return cls(
            database_url=database_url,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Runs at startup so a bad value fails before the socket is bound.
        Port 0 is accepted: the OS picks a free port (used by the tests).
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.buffer_size < 1:
            raise ValueError("buffer_size must be >= 1")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if not self.database_url:
            raise ValueError("database_url must not be empty")

        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level}")
