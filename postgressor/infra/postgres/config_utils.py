"""Placeholder expansion for values read from the fallback config file.

Placeholders are expanded after YAML parsing, inside string values only,
so whatever a variable holds ends up verbatim in the value.

- ``${NAME}``: required, fails when NAME is unset
- ``${NAME:-fallback}``: fallback when NAME is unset or empty
- ``${NAME:?reason}``: required, with ``reason`` in the error
"""

import os
import re
from collections.abc import Mapping
from typing import Any

from postgressor.errors import ConfigurationError

_PLACEHOLDER = re.compile(
    r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?:(?P<op>:[-?])(?P<arg>[^}]*))?\}"
)


def expand_placeholders(value: str, environ: Mapping[str, str]) -> str:
    """Replace every placeholder in one string value."""

    def lookup(match: re.Match[str]) -> str:
        name, op, arg = match.group("name", "op", "arg")
        current = environ.get(name)
        if op == ":-":
            return current or arg
        if current is None:
            reason = arg if op == ":?" else "not set"
            raise ConfigurationError(f"Required environment variable {name}: {reason}")
        return current

    return _PLACEHOLDER.sub(lookup, value)


def expand_section(
    section: Mapping[str, Any], environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Expand placeholders in the string values of a config file section."""
    env = os.environ if environ is None else environ
    return {
        key: expand_placeholders(value, env) if isinstance(value, str) else value
        for key, value in section.items()
    }
