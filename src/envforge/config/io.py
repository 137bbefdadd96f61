# envforge:header:start
#
#   project      : EnvForge
#   file         : io.py
#   file_relpath : src/envforge/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Lightweight TOML I/O helpers for EnvForge build settings.

This module centralizes **pure** helpers for reading the optional
``envforge.toml`` file found at the input root. Keeping them separate from
`envforge.config.model` keeps the model import-light.

Typical flow:
    1. Load the TOML file into plain Python containers (``load_toml_dict``).
    2. Select sections (``get_table_value``).
    3. Extract typed values, failing loudly on wrong types
       (``get_int_value_checked``, ``get_bool_value_checked``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeGuard

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from envforge.config.logging import get_logger
from envforge.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from envforge.config.logging import EnvforgeLogger

logger: EnvforgeLogger = get_logger(__name__)

TomlTable = dict[str, Any]


__all__: list[str] = [
    "TomlTable",
    "is_toml_table",
    "get_table_value",
    "get_int_value_checked",
    "get_bool_value_checked",
    "load_toml_dict",
]


def is_toml_table(val: Any) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping.

    Args:
        val (Any): Value to test.

    Returns:
        TypeGuard[TomlTable]: ``True`` if ``val`` is a ``dict[str, Any]``.
    """
    return isinstance(val, dict)


def get_table_value(table: TomlTable, key: str, *, source: str) -> TomlTable:
    """Extract a sub-table from a TOML table.

    Args:
        table (TomlTable): Parent table mapping.
        key (str): Sub-table key.
        source (str): Origin of the table, used in error messages.

    Returns:
        TomlTable: The sub-table, or an empty dict when the key is missing.

    Raises:
        ConfigError: If the key is present but not a table.
    """
    value: Any | None = table.get(key)
    if value is None:
        return {}
    if not is_toml_table(value):
        raise ConfigError(f"{source}: [{key}] must be a table")
    return value


def get_int_value_checked(
    table: TomlTable,
    key: str,
    default: int,
    *,
    source: str,
    minimum: int | None = None,
) -> int:
    """Extract an integer value from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.
        default (int): Value returned when the key is missing.
        source (str): Origin of the table, used in error messages.
        minimum (int | None): Smallest accepted value, if any.

    Returns:
        int: The configured or default value.

    Raises:
        ConfigError: If the value is not an integer or is below ``minimum``.
    """
    value: Any | None = table.get(key)
    if value is None:
        return default
    # bool is an int subclass; TOML booleans are not integers.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{source}: '{key}' must be an integer, got {value!r}")
    if minimum is not None and value < minimum:
        raise ConfigError(f"{source}: '{key}' must be >= {minimum}, got {value}")
    return value


def get_bool_value_checked(table: TomlTable, key: str, default: bool, *, source: str) -> bool:
    """Extract a boolean value from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.
        default (bool): Value returned when the key is missing.
        source (str): Origin of the table, used in error messages.

    Returns:
        bool: The configured or default value.

    Raises:
        ConfigError: If the value is not a boolean.
    """
    value: Any | None = table.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigError(f"{source}: '{key}' must be a boolean, got {value!r}")
    return value


def load_toml_dict(path: Path) -> TomlTable:
    """Load a TOML file into plain Python containers.

    Args:
        path (Path): TOML file.

    Returns:
        TomlTable: The parsed document, unwrapped from tomlkit items.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc.strerror or exc}") from exc
    try:
        doc = tomlkit.parse(text)
    except TomlkitParseError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    data: TomlTable = doc.unwrap()
    logger.debug("Loaded settings from %s: %s", path, data)
    return data
