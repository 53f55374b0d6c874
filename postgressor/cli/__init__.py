"""Command-line interface for postgressor.

The Typer application lives in ``postgressor.cli.app``; shared console
helpers in ``postgressor.cli.shared``.
"""
