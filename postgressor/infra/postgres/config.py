"""Connection parameter resolution.

Connection parameters come from exactly one source, decided once per
invocation:

1. ``DATABASE_URL`` when it is set and not blank
2. the environment's section of ``config/database.yml`` otherwise

``locate_source`` makes that decision and ``load`` on the returned source
produces a validated ``ConnectionConfig``. Any problem raises
``ConfigurationError`` before a single external command is built.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from postgressor.errors import ConfigurationError
from postgressor.infra.constants import DEFAULT_CONSTANTS

from .config_utils import expand_section


class ConnectionConfig(BaseModel):
    """Resolved connection parameters for one invocation.

    ``host`` and ``port`` may be absent, in which case the PostgreSQL tools
    fall back to their own defaults (usually the local socket).
    """

    # YAML reads unquoted 123456 as an int; keep it as the string it was
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    database: str
    host: str | None = None
    port: int | None = None
    user: str
    password: str = Field(repr=False)
    source_url: str | None = Field(default=None, repr=False)

    @field_validator("database", "user", "password", mode="before")
    @classmethod
    def _require_value(cls, value: Any, info: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError(f"{info.field_name} is required")
        return value

    @field_validator("host", "port", mode="before")
    @classmethod
    def _blank_as_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def cli_args(self) -> list[str]:
        """Generic ``-h/-U[/-p]`` fragment shared by non-superuser commands."""
        args: list[str] = []
        if self.host:
            args += ["-h", self.host]
        args += ["-U", self.user]
        if self.port is not None:
            args += ["-p", str(self.port)]
        return args

    @property
    def password_env(self) -> dict[str, str]:
        """Child-only environment carrying the password."""
        return {DEFAULT_CONSTANTS.PASSWORD_ENV: self.password}

    @property
    def dump_file(self) -> str:
        return f"{self.database}{DEFAULT_CONSTANTS.DUMP_SUFFIX}"


def _build_config(source: str, **fields: Any) -> ConnectionConfig:
    try:
        return ConnectionConfig(**fields)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigurationError(
            f"Invalid connection settings in {source}", details=problems
        ) from e


def _verbatim_host(netloc: str) -> str | None:
    """Host part of a URL authority with its case preserved."""
    hostport = netloc.rpartition("@")[2]
    if hostport.startswith("["):
        host = hostport[1:].partition("]")[0]
    else:
        host = hostport.partition(":")[0]
    return unquote(host) or None


@dataclass(frozen=True)
class UrlSource:
    """Connection string taken from ``DATABASE_URL``."""

    url: str

    def load(self) -> ConnectionConfig:
        """Parse the connection string into a ConnectionConfig.

        Raises:
            ConfigurationError: If the scheme is not ``postgres`` or the
                URL is malformed
        """
        try:
            parsed = urlparse(self.url.strip())
            port = parsed.port
        except ValueError as e:
            raise ConfigurationError(
                f"Malformed {DEFAULT_CONSTANTS.DATABASE_URL_ENV}: {e}"
            ) from e

        if parsed.scheme != DEFAULT_CONSTANTS.URL_SCHEME:
            raise ConfigurationError(
                f"DB adapter is not {DEFAULT_CONSTANTS.URL_SCHEME}: unsupported adapter "
                f"'{parsed.scheme or '<none>'}'"
            )

        logger.debug(f"Resolved connection from {DEFAULT_CONSTANTS.DATABASE_URL_ENV}")
        return _build_config(
            DEFAULT_CONSTANTS.DATABASE_URL_ENV,
            database=unquote(parsed.path.removeprefix("/")),
            host=_verbatim_host(parsed.netloc),
            port=port,
            user=unquote(parsed.username) if parsed.username else None,
            password=unquote(parsed.password) if parsed.password else None,
            source_url=self.url,
        )


@dataclass(frozen=True)
class FileSource:
    """One environment section of the fallback YAML config file."""

    path: Path
    environment: str

    def load(self, environ: Mapping[str, str] | None = None) -> ConnectionConfig:
        """Read the selected section of the config file.

        Args:
            environ: Variables used for ``${VAR}`` placeholders
                (defaults to os.environ)

        Raises:
            ConfigurationError: If the file cannot be read or parsed, the
                section is missing, or its adapter is not ``postgresql``
        """
        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Unable to read {self.path}: {e}") from e

        try:
            loaded = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing {self.path}", details=str(e)) from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Invalid structure in {self.path}: expected a mapping")

        section = loaded.get(self.environment)
        if not isinstance(section, dict):
            raise ConfigurationError(
                f"No '{self.environment}' section in {self.path}"
            )

        section = expand_section(section, environ)

        adapter = section.get("adapter")
        if adapter != DEFAULT_CONSTANTS.FILE_ADAPTER:
            raise ConfigurationError(
                f"DB adapter is not {DEFAULT_CONSTANTS.FILE_ADAPTER}: unsupported adapter "
                f"'{adapter}' in '{self.environment}' section of {self.path}"
            )

        logger.debug(f"Resolved connection from {self.path} [{self.environment}]")
        return _build_config(
            f"{self.path} [{self.environment}]",
            database=section.get("database"),
            host=section.get("host"),
            port=section.get("port"),
            user=section.get("username"),
            password=section.get("password"),
        )


ConnectionSource = UrlSource | FileSource


def selected_environment(environ: Mapping[str, str] | None = None) -> str:
    """Return the environment name used to pick a config file section."""
    env = os.environ if environ is None else environ
    for name in DEFAULT_CONSTANTS.ENVIRONMENT_ENVS:
        value = env.get(name, "").strip()
        if value:
            return value
    return DEFAULT_CONSTANTS.DEFAULT_ENVIRONMENT


def locate_source(
    environ: Mapping[str, str] | None = None, config_path: Path | None = None
) -> ConnectionSource:
    """Decide where connection parameters come from.

    Args:
        environ: Environment to read (defaults to os.environ)
        config_path: Fallback file location (defaults to config/database.yml)

    Returns:
        UrlSource or FileSource

    Raises:
        ConfigurationError: If neither source is available
    """
    env = os.environ if environ is None else environ
    path = config_path or DEFAULT_CONSTANTS.CONFIG_FILE

    url = env.get(DEFAULT_CONSTANTS.DATABASE_URL_ENV, "")
    if url.strip():
        return UrlSource(url)

    if path.is_file():
        return FileSource(path, selected_environment(env))

    raise ConfigurationError(
        f"Env variable {DEFAULT_CONSTANTS.DATABASE_URL_ENV} is not provided and "
        f"{path} does not exist: no connection source"
    )


def resolve_connection(
    environ: Mapping[str, str] | None = None, config_path: Path | None = None
) -> ConnectionConfig:
    """Resolve connection parameters for this invocation.

    Raises:
        ConfigurationError: If the parameters cannot be resolved
    """
    source = locate_source(environ, config_path)
    if isinstance(source, FileSource):
        return source.load(environ)
    return source.load()
