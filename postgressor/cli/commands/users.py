"""Application role management.

https://www.postgresql.org/docs/current/app-psql.html
https://www.postgresql.org/docs/current/app-dropuser.html
"""

from typing import Annotated

import typer

from postgressor.cli.context import get_cli_context
from postgressor.cli.shared.console import with_error_handling

from .shared import exit_with


@with_error_handling
def create_user(
    ctx: typer.Context,
    superuser: Annotated[
        bool,
        typer.Option(
            "--superuser",
            help="Create user as superuser",
        ),
    ] = False,
) -> None:
    """Create app database user."""
    # psql CREATE USER instead of createuser, so the password is set too
    cli = get_cli_context(ctx)
    exit_with(cli.dispatcher.create_user(superuser=superuser))


@with_error_handling
def drop_user(ctx: typer.Context) -> None:
    """Drop app database user."""
    cli = get_cli_context(ctx)
    exit_with(cli.dispatcher.drop_user())
