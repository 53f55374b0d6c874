"""Command runner for executing PostgreSQL client tools.

The runner is the only place that spawns processes. Commands run one at a
time, inherit the terminal for their output, and block until they exit.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from loguru import logger
from rich.markup import escape

from postgressor.cli.shared.console import CLIConsole, console
from postgressor.infra.constants import DEFAULT_CONSTANTS

from .types import CommandResult, PgCommand


class CommandRunner:
    """Low-level command executor with consistent result handling.

    Output of the child is not captured: pg_restore --verbose and psql
    errors go straight to the user's terminal.
    """

    def __init__(
        self,
        *,
        verbose: bool = False,
        cwd: Path | None = None,
        cli_console: CLIConsole | None = None,
    ) -> None:
        """Initialize the command runner.

        Args:
            verbose: Print each assembled command before running it
            cwd: Working directory for children (defaults to the current one)
            cli_console: Console used for echo and error lines
        """
        self.verbose = verbose
        self.cwd = cwd
        self._console = cli_console or console

    def run(self, command: PgCommand) -> CommandResult:
        """Execute a command and return structured result.

        Args:
            command: Assembled command with its child-only environment

        Returns:
            CommandResult with success status and return code
        """
        if self.verbose:
            self._console.print(f"[dim]$ {escape(command.display())}[/dim]")

        logger.debug(f"Running {command.executable} (privileged={command.privileged})")

        env = {**os.environ, **command.env}
        try:
            result = subprocess.run(
                list(command.argv),
                cwd=self.cwd,
                env=env,
                check=False,
            )
        except FileNotFoundError:
            self._console.error(f"Executable not found: {command.argv[0]}")
            return CommandResult(
                success=False, returncode=DEFAULT_CONSTANTS.COMMAND_NOT_FOUND
            )

        logger.debug(f"{command.executable} exited with {result.returncode}")
        return CommandResult(
            success=result.returncode == 0,
            returncode=result.returncode,
        )
