"""Application database management.

https://www.postgresql.org/docs/current/app-createdb.html
https://www.postgresql.org/docs/current/app-dropdb.html
https://www.postgresql.org/docs/current/app-pgdump.html
https://www.postgresql.org/docs/current/app-pgrestore.html
"""

from pathlib import Path
from typing import Annotated

import typer

from postgressor.cli.context import get_cli_context
from postgressor.cli.shared.console import with_error_handling

from .shared import exit_with


@with_error_handling
def create_database(ctx: typer.Context) -> None:
    """Create app database."""
    cli = get_cli_context(ctx)
    exit_with(cli.dispatcher.create_database())


@with_error_handling
def drop_database(ctx: typer.Context) -> None:
    """Drop app database."""
    cli = get_cli_context(ctx)
    exit_with(cli.dispatcher.drop_database())


@with_error_handling
def dump_database(ctx: typer.Context) -> None:
    """Dump (backup) app database to <database>.dump."""
    cli = get_cli_context(ctx)
    exit_with(cli.dispatcher.dump_database())


@with_error_handling
def restore_database(
    ctx: typer.Context,
    dump_file: Annotated[
        Path,
        typer.Argument(
            help="Path to a dump created by dump-database",
        ),
    ],
    superuser: Annotated[
        bool,
        typer.Option(
            "--superuser",
            help="Temporarily grant SUPERUSER to the app user during the restore",
        ),
    ] = False,
) -> None:
    """Restore app database from backup."""
    cli = get_cli_context(ctx)
    exit_with(cli.dispatcher.restore_database(dump_file, superuser=superuser))
