"""Constants shared by the resolver, command builder and CLI.

This module centralizes environment variable names, file locations and
fixed identifiers so they are easy to find and to override in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class PostgresConstants:
    """Names and defaults used when talking to PostgreSQL tools.

    All attributes are class-level and immutable.
    """

    # Environment variables read by the resolver
    DATABASE_URL_ENV: str = "DATABASE_URL"
    ENVIRONMENT_ENVS: tuple[str, ...] = ("RAILS_ENV", "APP_ENV")
    DEFAULT_ENVIRONMENT: str = "production"
    VERBOSE_ENV: str = "POSTGRESSOR_VERBOSE"

    # Only this URL scheme and this file adapter are accepted
    URL_SCHEME: str = "postgres"
    FILE_ADAPTER: str = "postgresql"

    # Fallback config file, relative to the working directory
    CONFIG_FILE: Path = Path("config") / "database.yml"

    # Child-only variable carrying the password for libpq tools
    PASSWORD_ENV: str = "PGPASSWORD"

    # OS account used for role management
    SUPERUSER_ACCOUNT: str = "postgres"

    DUMP_SUFFIX: str = ".dump"

    # Returned when an executable cannot be found, as a shell would
    COMMAND_NOT_FOUND: int = 127

    @property
    def sudo_prefix(self) -> tuple[str, ...]:
        """Prefix that runs a command as the superuser OS account."""
        return ("sudo", "-i", "-u", self.SUPERUSER_ACCOUNT)


TRUTHY_VALUES = frozenset({"1", "true", "yes", "on"})

DEFAULT_CONSTANTS = PostgresConstants()
