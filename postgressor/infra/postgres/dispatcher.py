"""Database lifecycle operations.

The dispatcher maps each user-facing operation to one external command
(three for a restore with temporary superuser), runs it and reports
success. A failing tool is not an exception: its own output is the error
and its return code travels back in the CommandResult.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from postgressor.cli.shared.console import CLIConsole, console
from postgressor.infra.shell import CommandResult, CommandRunner

from .commands import PostgresCommands
from .config import ConnectionConfig


class PostgresDispatcher:
    """Runs lifecycle operations against one resolved connection."""

    def __init__(
        self,
        config: ConnectionConfig,
        runner: CommandRunner,
        cli_console: CLIConsole | None = None,
    ) -> None:
        self._config = config
        self._commands = PostgresCommands(config)
        self._runner = runner
        self._console = cli_console or console

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    def _report(self, result: CommandResult, message: str) -> CommandResult:
        if result.success:
            self._console.ok(message)
        return result

    # =========================================================================
    # Users
    # =========================================================================

    def create_user(self, superuser: bool = False) -> CommandResult:
        """Create the application role.

        Args:
            superuser: Create the role with SUPERUSER
        """
        result = self._runner.run(self._commands.create_user(superuser=superuser))
        return self._report(result, f"Created user {self._config.user}")

    def drop_user(self) -> CommandResult:
        result = self._runner.run(self._commands.drop_user())
        return self._report(result, f"Dropped user {self._config.user}")

    # =========================================================================
    # Databases
    # =========================================================================

    def create_database(self) -> CommandResult:
        result = self._runner.run(self._commands.create_database())
        return self._report(result, f"Created database {self._config.database}")

    def drop_database(self) -> CommandResult:
        result = self._runner.run(self._commands.drop_database())
        return self._report(result, f"Dropped database {self._config.database}")

    def dump_database(self) -> CommandResult:
        """Dump the database to ``<database>.dump`` in the working directory."""
        c = self._config
        result = self._runner.run(self._commands.dump_database())
        return self._report(
            result, f"Dumped database {c.database} to {c.dump_file} file"
        )

    def restore_database(
        self, dump_file: str | Path, superuser: bool = False
    ) -> CommandResult:
        """Restore the database from a custom-format dump.

        Args:
            dump_file: Path to the dump produced by ``dump_database``
            superuser: Grant SUPERUSER to the application role for the
                duration of the restore. The revoke runs even when the
                restore fails.

        Returns:
            Result of pg_restore, or of the grant if that failed
        """
        c = self._config
        dump_file = str(dump_file)
        restore = self._commands.restore_database(dump_file)

        if not superuser:
            result = self._runner.run(restore)
            return self._report(
                result, f"Restored database {c.database} from {dump_file} file"
            )

        granted = self._runner.run(self._commands.grant_superuser())
        if not granted.success:
            self._console.error(f"Could not grant SUPERUSER to {c.user}")
            return granted

        try:
            result = self._runner.run(restore)
        finally:
            revoked = self._runner.run(self._commands.revoke_superuser())
            if not revoked.success:
                logger.warning(f"Revoking SUPERUSER from {c.user} failed")
                self._console.warn(
                    f"Could not revoke SUPERUSER from {c.user}; revoke it manually"
                )

        return self._report(
            result, f"Restored database {c.database} from {dump_file} file"
        )
