# envforge:header:start
#
#   project      : EnvForge
#   file         : values.py
#   file_relpath : src/envforge/core/values.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Canonical document values.

A document value is the structurally-typed result of converting a script value.
It is represented with plain JSON-compatible Python objects so it can be handed
to the JSON encoder as is:

    - nil: ``None``
    - boolean: ``bool`` (emitted as ``true``/``false``, never as ``1``/``0``)
    - number: finite ``int`` or ``float``
    - string: ``str``
    - array: ``list`` of document values
    - object: ``dict`` mapping ``str`` keys to document values

Because ``bool`` subclasses ``int`` in Python, code inspecting these values
must test for booleans before numbers.
"""

from __future__ import annotations

import math
from typing import Union

DocValue = Union[None, bool, int, float, str, list["DocValue"], dict[str, "DocValue"]]


def normalize_number(value: int | float) -> int | float:
    """Return ``value`` as an ``int`` when it holds an integral quantity.

    Lua floats such as ``30.0`` are emitted as ``30``; non-integral, infinite and
    NaN floats are kept as floats.

    Args:
        value (int | float): Number read from a script.

    Returns:
        int | float: The normalized number.
    """
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return value
