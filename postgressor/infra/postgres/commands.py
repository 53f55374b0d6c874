"""Argument vectors for the PostgreSQL client tools.

Each method returns a PgCommand: an ordered token list plus the variables
injected into the child. Nothing here touches a shell, so database names
and file paths are passed through as single arguments whatever they contain.

Role management runs as the ``postgres`` OS account through sudo. That
channel is already privileged, so the role password is embedded in the SQL
text. Every other command authenticates as the application role and gets
its password through PGPASSWORD, never through argv.
"""

from __future__ import annotations

from postgressor.infra.constants import DEFAULT_CONSTANTS
from postgressor.infra.shell import PgCommand

from .config import ConnectionConfig


def _sql_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


class PostgresCommands:
    """Builds commands for one resolved connection."""

    def __init__(self, config: ConnectionConfig) -> None:
        self._config = config

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    # =========================================================================
    # Role management (superuser OS account)
    # =========================================================================

    def _privileged(self, *argv: str) -> PgCommand:
        return PgCommand(
            argv=[*DEFAULT_CONSTANTS.sudo_prefix, *argv],
            privileged=True,
        )

    def _psql(self, sql: str) -> PgCommand:
        return self._privileged("psql", "-c", sql)

    def create_user(self, superuser: bool = False) -> PgCommand:
        """``CREATE USER`` through psql, so the password is set in one step.

        Args:
            superuser: Also grant SUPERUSER to the new role
        """
        c = self._config
        privileges = "CREATEDB LOGIN SUPERUSER" if superuser else "CREATEDB LOGIN"
        sql = (
            f"CREATE USER {c.user} WITH {privileges} "
            f"PASSWORD {_sql_literal(c.password)};"
        )
        return self._psql(sql)

    def drop_user(self) -> PgCommand:
        return self._privileged("dropuser", self._config.user)

    def grant_superuser(self) -> PgCommand:
        return self._psql(f"ALTER USER {self._config.user} WITH SUPERUSER;")

    def revoke_superuser(self) -> PgCommand:
        return self._psql(f"ALTER USER {self._config.user} WITH NOSUPERUSER;")

    # =========================================================================
    # Database management (application role)
    # =========================================================================

    def _authenticated(self, *argv: str) -> PgCommand:
        return PgCommand(argv=list(argv), env=self._config.password_env)

    def create_database(self) -> PgCommand:
        c = self._config
        return self._authenticated("createdb", c.database, *c.cli_args)

    def drop_database(self) -> PgCommand:
        c = self._config
        return self._authenticated("dropdb", c.database, *c.cli_args)

    def dump_database(self) -> PgCommand:
        """Custom-format dump to ``<database>.dump`` in the working directory."""
        c = self._config
        return self._authenticated(
            "pg_dump",
            c.database,
            *c.cli_args,
            "-Fc",
            "--no-acl",
            "--no-owner",
            "-f",
            c.dump_file,
        )

    def restore_database(self, dump_file: str) -> PgCommand:
        c = self._config
        return self._authenticated(
            "pg_restore",
            dump_file,
            "-d",
            c.database,
            *c.cli_args,
            "--no-acl",
            "--no-owner",
            "--verbose",
        )
