# envforge:header:start
#
#   project      : EnvForge
#   file         : converter.py
#   file_relpath : src/envforge/runtime/converter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Conversion of Lua values into canonical document values.

Dispatch on the Lua type of the input:

    - string, number, nil, boolean map onto their `envforge.core.values` variants;
    - tables become either an array or an object (see below);
    - anything else (functions, userdata, coroutines, foreign Python objects)
      raises `ConversionError`.

Tables are scanned with ``next``-style iteration; entry order is never relied
upon. String keys go to an object-in-progress, numeric keys (truncated toward
zero) to an array-in-progress. If at least one string key survives, the result
is an object and the numeric entries are folded into it under their decimal
string form (``{FOO = "x", [1] = "y"}`` gives ``{"FOO": "x", "1": "y"}``). An
integer entry wins over a string key spelling the same number. Otherwise the
result is an array: slots ``0..max`` with holes set to ``None``, and slot 0
dropped when it was never populated, so Lua's 1-based sequences come out
0-based.

Key filtering (``uckeysonly``) only applies to the outermost table of a
composition. It drops string keys that start with ``_`` or are not entirely upper
case (``env`` and lowercase helpers), without converting their values. Nested
tables keep every key. The standard library and ``vars`` never show up here:
they live behind each binding table's metatable and ``next`` does not see them.

Numbers must be finite, since NaN and infinities have no JSON form. Array
indexes are capped at `MAX_ARRAY_INDEX` so that a single huge key cannot
allocate an enormous list.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from lupa import lua_type

from envforge.config.logging import get_logger
from envforge.constants import MAX_ARRAY_INDEX
from envforge.core.errors import ConversionError
from envforge.core.values import normalize_number
from envforge.runtime.lua import ScriptRuntime

if TYPE_CHECKING:
    from envforge.config.logging import EnvforgeLogger
    from envforge.core.values import DocValue
    from envforge.runtime.lua import LuaTable

logger: EnvforgeLogger = get_logger(__name__)


def is_exported_key(key: str) -> bool:
    """Return True if a top-level binding name is emitted into documents.

    Args:
        key (str): Binding name.

    Returns:
        bool: False for names starting with ``_`` or containing lowercase characters.
    """
    return not key.startswith("_") and key == key.upper()


class ValueConverter:
    """Convert Lua values into canonical document values."""

    def convert(self, value: object, path: str, *, uckeysonly: bool = False) -> DocValue:
        """Convert ``value`` into a document value.

        Args:
            value (object): A value read from a Lua table (as returned by ``lupa``).
            path (str): Diagnostic label of ``value``, e.g. ``web.prod``.
            uckeysonly (bool): Filter non-exported string keys of this table only.

        Returns:
            DocValue: The canonical value.

        Raises:
            ConversionError: On unsupported value or key types, negative array
                indexes, or tables nested too deeply (e.g. self-referencing tables).
        """
        try:
            return self._convert(value, path, uckeysonly=uckeysonly)
        except RecursionError as exc:
            raise ConversionError(
                f"Failed to extract {path}: tables nested too deeply (cyclic reference?)",
                path=path,
            ) from exc

    def _convert(self, value: object, path: str, *, uckeysonly: bool = False) -> DocValue:
        if value is None:
            return None
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            if not math.isfinite(value):
                raise ConversionError(f"Failed to extract {path}: non-finite number", path=path)
            return normalize_number(value)
        if isinstance(value, str):
            return value
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        if lua_type(value) == "table":
            return self._convert_table(value, path, uckeysonly=uckeysonly)
        raise ConversionError(f"Failed to extract {path}: not a supported type", path=path)

    def _convert_table(self, table: LuaTable, path: str, *, uckeysonly: bool) -> DocValue:
        fields: dict[str, DocValue] = {}
        items: dict[int, DocValue] = {}

        for key, value in table.items():
            if isinstance(key, bytes):
                key = key.decode("utf-8", errors="replace")
            if isinstance(key, str):
                if uckeysonly and not is_exported_key(key):
                    logger.trace("Skipping %s.%s", path, key)
                    continue
                fields[key] = self._convert(value, f"{path}.{key}")
            elif isinstance(key, (int, float)) and not isinstance(key, bool):
                if not math.isfinite(key):
                    raise ConversionError(
                        f"{path} contains a non-finite numeric key {key}", path=path
                    )
                index: int = int(key)
                items[index] = self._convert(value, f"{path}[{index}]")
            else:
                raise ConversionError(
                    f"{path} contains a key of unsupported type {ScriptRuntime.type_name(key)}; "
                    "must be string or integer",
                    path=path,
                )

        if fields:
            for index, item in items.items():
                fields[str(index)] = item
            return fields
        return _to_array(items, path)


def _to_array(items: dict[int, DocValue], path: str) -> list[DocValue]:
    """Lay out integer-keyed entries as a 0-based list.

    Args:
        items (dict[int, DocValue]): Converted entries by integer index.
        path (str): Diagnostic label of the table.

    Returns:
        list[DocValue]: Entries by position, holes filled with ``None``. A never
        populated slot 0 is dropped.

    Raises:
        ConversionError: If an index is negative or above `MAX_ARRAY_INDEX`.
    """
    if not items:
        return []
    lowest: int = min(items)
    if lowest < 0:
        raise ConversionError(f"{path} contains negative index {lowest}", path=path)
    highest: int = max(items)
    if highest > MAX_ARRAY_INDEX:
        raise ConversionError(
            f"{path} contains index {highest} above the array limit {MAX_ARRAY_INDEX}",
            path=path,
        )
    array: list[DocValue] = [None] * (highest + 1)
    for index, item in items.items():
        array[index] = item
    if 0 not in items:
        del array[0]
    return array
