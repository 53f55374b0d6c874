"""Main CLI application module.

This module provides the main entry point for the postgressor CLI. Every
command resolves the connection (DATABASE_URL or config/database.yml),
runs one PostgreSQL client tool and exits with that tool's status.

Commands:
- create-user / drop-user: application role (as the postgres OS account)
- create-database / drop-database: application database
- dump-database / restore-database: custom-format backups
"""

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from postgressor import __version__

from .commands import (
    create_database,
    create_user,
    drop_database,
    drop_user,
    dump_database,
    restore_database,
)
from .context import configure_logging, verbose_from_env

app = typer.Typer(
    help="Shorthand commands for PostgreSQL database lifecycle operations",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# (command, name, pre-rename alias)
_COMMANDS = [
    (create_user, "create-user", "createuser"),
    (drop_user, "drop-user", "dropuser"),
    (create_database, "create-database", "createdb"),
    (drop_database, "drop-database", "dropdb"),
    (dump_database, "dump-database", "dumpdb"),
    (restore_database, "restore-database", "restoredb"),
]

for _command, _name, _alias in _COMMANDS:
    app.command(name=_name)(_command)
    app.command(name=_alias, hidden=True)(_command)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            help="Print each command before running it (or set POSTGRESSOR_VERBOSE)",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Print the version",
            callback=_print_version,
            is_eager=True,
        ),
    ] = False,
) -> None:
    # Variables already present in the environment win over .env
    load_dotenv(Path.cwd() / ".env", override=False)

    verbose = verbose or verbose_from_env()
    configure_logging(verbose)
    if ctx.obj is None:
        ctx.obj = {"verbose": verbose}


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
