# envforge:header:start
#
#   project      : EnvForge
#   file         : __init__.py
#   file_relpath : src/envforge/runtime/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Script evaluation and value conversion.

Modules, leaves first:

- ``lua``: narrow adapter over the embedded Lua interpreter (``lupa``).
- ``scope``: isolated scopes, the scope loader and the ``vars`` import resolver.
- ``composer``: builds the environment + application composition for one pair.
- ``converter``: turns Lua values into canonical document values.
"""

from __future__ import annotations

from envforge.runtime.composer import ScopeComposer
from envforge.runtime.converter import ValueConverter
from envforge.runtime.lua import ScriptRuntime
from envforge.runtime.scope import ImportResolver, Scope, ScopeLoader

__all__: list[str] = [
    "ImportResolver",
    "Scope",
    "ScopeComposer",
    "ScopeLoader",
    "ScriptRuntime",
    "ValueConverter",
]
