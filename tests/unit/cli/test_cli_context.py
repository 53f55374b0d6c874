"""Tests for CLI context dependency injection."""

from unittest.mock import Mock, patch

import pytest
import typer

from postgressor.cli.context import (
    CLIContext,
    build_cli_context,
    get_cli_context,
    verbose_from_env,
)
from postgressor.errors import ConfigurationError


def test_cli_context_is_immutable():
    """Test that CLIContext is frozen/immutable."""
    ctx = CLIContext(console=Mock(), config=Mock(), runner=Mock(), dispatcher=Mock())

    with pytest.raises(AttributeError):
        ctx.console = Mock()  # type: ignore[misc]


@pytest.mark.parametrize(
    ("value", "expected"),
    [("1", True), ("true", True), ("YES", True), (" on ", True), ("0", False), ("", False)],
)
def test_verbose_from_env(value, expected):
    assert verbose_from_env({"POSTGRESSOR_VERBOSE": value}) is expected


def test_verbose_from_env_unset():
    assert verbose_from_env({}) is False


@patch("postgressor.cli.context.resolve_connection")
def test_build_cli_context_wires_dependencies(mock_resolve, connection_config):
    mock_resolve.return_value = connection_config

    ctx = build_cli_context(verbose=True)

    assert ctx.config is connection_config
    assert ctx.runner.verbose is True
    assert ctx.dispatcher.config is connection_config


@patch("postgressor.cli.context.resolve_connection")
def test_build_cli_context_propagates_configuration_error(mock_resolve):
    mock_resolve.side_effect = ConfigurationError("no connection source")

    with pytest.raises(ConfigurationError):
        build_cli_context()


def test_get_cli_context_from_typer_context():
    """Test that get_cli_context retrieves from Typer context."""
    existing = CLIContext(console=Mock(), config=Mock(), runner=Mock(), dispatcher=Mock())
    typer_ctx = Mock(spec=typer.Context)
    typer_ctx.obj = existing

    assert get_cli_context(typer_ctx) is existing


def test_get_cli_context_builds_and_caches():
    typer_ctx = Mock(spec=typer.Context)
    typer_ctx.obj = {"verbose": True}

    with patch("postgressor.cli.context.build_cli_context") as mock_build:
        built = Mock(spec=CLIContext)
        mock_build.return_value = built

        result = get_cli_context(typer_ctx)

    mock_build.assert_called_once_with(verbose=True)
    assert result is built
    assert typer_ctx.obj is built
