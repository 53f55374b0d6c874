"""Execution of external PostgreSQL tools.

- types: command and result value objects
- runner: synchronous executor with optional command echo
"""

from .runner import CommandRunner
from .types import CommandResult, PgCommand

__all__ = [
    "CommandRunner",
    "CommandResult",
    "PgCommand",
]
