"""Shorthand commands for PostgreSQL database lifecycle operations."""

from loguru import logger

__version__ = "0.3.0"

# Library logging stays quiet unless the CLI turns it on
logger.disable("postgressor")
