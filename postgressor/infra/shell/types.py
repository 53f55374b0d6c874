"""Data types for external command execution."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field

from postgressor.infra.constants import DEFAULT_CONSTANTS


@dataclass
class CommandResult:
    """Result of a command execution."""

    success: bool
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""


@dataclass(frozen=True)
class PgCommand:
    """A fully assembled invocation of an external tool.

    Attributes:
        argv: Executable followed by its ordered argument tokens
        env: Variables injected into the child process only
        privileged: Whether argv already runs under the superuser OS account
    """

    argv: list[str]
    env: dict[str, str] = field(default_factory=dict)
    privileged: bool = False

    @property
    def executable(self) -> str:
        """Name of the PostgreSQL tool, ignoring any sudo prefix."""
        if self.privileged:
            return self.argv[len(DEFAULT_CONSTANTS.sudo_prefix)]
        return self.argv[0]

    def display(self) -> str:
        """Render the command the way a user could paste it into a shell."""
        assignments = [f"{key}={shlex.quote(value)}" for key, value in self.env.items()]
        return " ".join([*assignments, shlex.join(self.argv)])
