"""Shared helpers for command modules."""

import typer

from postgressor.infra.shell import CommandResult


def exit_with(result: CommandResult) -> None:
    """Propagate a failed tool's return code as the CLI's exit code.

    A child killed by a signal reports ``-signum``; it becomes
    ``128 + signum`` as in a shell.
    """
    if result.success:
        return
    code = result.returncode
    if code < 0:
        code = 128 - code
    raise typer.Exit(code or 1)
