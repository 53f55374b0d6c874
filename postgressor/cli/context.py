"""CLI context and dependency container."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass

import click
import typer
from loguru import logger

from postgressor.cli.shared.console import CLIConsole, console
from postgressor.infra.constants import DEFAULT_CONSTANTS, TRUTHY_VALUES
from postgressor.infra.postgres import (
    ConnectionConfig,
    PostgresDispatcher,
    resolve_connection,
)
from postgressor.infra.shell import CommandRunner


def verbose_from_env(environ: Mapping[str, str] | None = None) -> bool:
    """Return whether the verbose toggle is set in the environment."""
    env = os.environ if environ is None else environ
    value = env.get(DEFAULT_CONSTANTS.VERBOSE_ENV, "")
    return value.strip().lower() in TRUTHY_VALUES


@dataclass(frozen=True)
class CLIContext:
    """Runtime dependencies for one CLI invocation."""

    console: CLIConsole
    config: ConnectionConfig
    runner: CommandRunner
    dispatcher: PostgresDispatcher


def build_cli_context(verbose: bool = False) -> CLIContext:
    """Build a fresh CLIContext, resolving the connection.

    Raises:
        ConfigurationError: If connection parameters cannot be resolved
    """
    config = resolve_connection()
    runner = CommandRunner(verbose=verbose or verbose_from_env(), cli_console=console)

    return CLIContext(
        console=console,
        config=config,
        runner=runner,
        dispatcher=PostgresDispatcher(config, runner, console),
    )


def get_cli_context(ctx: typer.Context | None = None) -> CLIContext:
    """Return the CLIContext from Typer, building it on first use.

    Resolution is deferred until a command needs it so ``--version`` and
    ``--help`` work without a connection source.
    """
    context = ctx or click.get_current_context(silent=True)
    if context and isinstance(context.obj, CLIContext):
        return context.obj

    verbose = bool(context and isinstance(context.obj, dict) and context.obj.get("verbose"))
    cli_context = build_cli_context(verbose=verbose)
    if context:
        context.obj = cli_context
    return cli_context


def configure_logging(verbose: bool) -> None:
    """Route postgressor debug logs to stderr when verbose mode is on."""
    if not verbose:
        logger.disable("postgressor")
        return

    logger.remove()
    logger.add(sys.stderr, level="DEBUG", format="<dim>{time:HH:mm:ss}</dim> {message}")
    logger.enable("postgressor")
