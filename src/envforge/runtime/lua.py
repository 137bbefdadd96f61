# envforge:header:start
#
#   project      : EnvForge
#   file         : lua.py
#   file_relpath : src/envforge/runtime/lua.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Narrow adapter over the embedded Lua interpreter.

EnvForge treats the interpreter as an external collaborator. Everything the
rest of the package needs from it goes through `ScriptRuntime`:

    - create an empty binding table for a scope;
    - install the standard library behind such a table (via its metatable);
    - register a host callable under a name;
    - compile source text against a table (reporting load failures);
    - run compiled code under protected-call semantics, reporting Lua errors as
      Python exceptions.

One `ScriptRuntime` wraps one ``lupa.LuaRuntime`` (one Lua state). The batch
driver creates a fresh runtime per composition, so no script state outlives the
composition that created it.

Note:
    Python exceptions raised by a registered callable travel through Lua as Lua
    errors and are re-raised unchanged by ``lupa`` at the outer Python call. This
    keeps e.g. a `ScriptLoadError` in a nested fragment intact.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from lupa import LuaError, LuaRuntime, lua_type

from envforge.config.logging import get_logger
from envforge.core.errors import ScriptLoadError, ScriptRuntimeError

if TYPE_CHECKING:
    from pathlib import Path

    from envforge.config.logging import EnvforgeLogger

logger: EnvforgeLogger = get_logger(__name__)

# lupa does not export its table/function proxy classes; keep a readable alias.
LuaTable = Any
LuaFunction = Any

_COMPILE_SOURCE = """
return function(source, chunkname, scope)
  local chunk, message = load(source, chunkname, "t", scope)
  return chunk, message
end
"""

# Library tables are copied one level deep so that a script patching e.g.
# `string.trim` cannot affect another scope of the same runtime. The copies live
# in a per-scope library table reached through the scope's `__index`, so the
# binding table itself only ever holds what the script (or the host) assigned.
# The `python` bridge table lupa registers is never copied.
_INSTALL_STDLIB_SOURCE = """
local base = _G
return function(scope)
  local library = {}
  for key, value in pairs(base) do
    if key == "python" then
      -- host bridge stays out of script scopes
    elseif type(value) == "table" and value ~= base then
      local copy = {}
      for k, v in pairs(value) do
        copy[k] = v
      end
      library[key] = copy
    else
      library[key] = value
    end
  end
  library._G = scope
  setmetatable(scope, {__index = library})
  return library
end
"""

# Wraps a host callable taking a single string argument. Misuse is reported
# with Lua's own error(), blamed on the calling script line.
_SINGLE_STRING_CALLABLE_SOURCE = """
return function(binding_name, host)
  return function(...)
    local arg = ...
    if select("#", ...) ~= 1 or type(arg) ~= "string" then
      error("'" .. binding_name .. "' takes exactly one argument", 2)
    end
    return host(arg)
  end
end
"""


class ScriptRuntime:
    """One embedded Lua state plus the helpers EnvForge needs from it.

    Attributes:
        lua (LuaRuntime): The underlying ``lupa`` runtime.
    """

    def __init__(self) -> None:
        # Keep the host bridge minimal; install_stdlib never copies it into scopes.
        self.lua: LuaRuntime = LuaRuntime(
            unpack_returned_tuples=True,
            register_eval=False,
            register_builtins=False,
        )
        self._compile: LuaFunction = self.lua.execute(_COMPILE_SOURCE)
        self._install_stdlib: LuaFunction = self.lua.execute(_INSTALL_STDLIB_SOURCE)
        self._wrap_callable: LuaFunction = self.lua.execute(_SINGLE_STRING_CALLABLE_SOURCE)
        logger.trace("Created Lua runtime")

    def new_table(self) -> LuaTable:
        """Return a new, empty Lua table."""
        return self.lua.table()

    def install_stdlib(self, table: LuaTable) -> LuaTable:
        """Make the standard library visible from ``table`` without adding keys to it.

        Library entries go into a separate per-scope table that ``table`` falls back
        to through its ``__index`` metamethod. ``_G`` resolves to ``table`` itself.
        Iterating ``table`` therefore only yields names assigned by scripts or by
        the host.

        Args:
            table (LuaTable): Binding table of a scope.

        Returns:
            LuaTable: The scope's library table, for host-provided globals such as
            ``vars`` that scripts read but never export.
        """
        return self._install_stdlib(table)

    def register_callable(
        self,
        table: LuaTable,
        name: str,
        host: Callable[[str], Any],
    ) -> None:
        """Bind ``host`` under ``name`` in ``table`` as a one-string-argument function.

        Calls with any other arity or argument type raise the Lua error
        ``'<name>' takes exactly one argument`` inside the calling script.

        Args:
            table (LuaTable): Binding table of a scope.
            name (str): Binding name visible to scripts.
            host (Callable[[str], Any]): Python callable receiving the string argument.
        """
        table[name] = self._wrap_callable(name, host)

    def compile(self, source: str, *, path: Path, table: LuaTable) -> LuaFunction:
        """Compile ``source`` with ``table`` as its global environment.

        Args:
            source (str): Script source text.
            path (Path): Script path, used as the chunk name in Lua diagnostics.
            table (LuaTable): Binding table the chunk reads and writes globals from.

        Returns:
            LuaFunction: The compiled chunk, ready for `call`.

        Raises:
            ScriptLoadError: If the source cannot be parsed or compiled.
        """
        chunk, message = self._compile(source, f"@{path}", table)
        if chunk is None:
            raise ScriptLoadError(f"Failed to load {path}: {message}", path=path)
        return chunk

    def call(self, chunk: LuaFunction, *, path: Path) -> None:
        """Run a compiled chunk under protected-call semantics.

        Args:
            chunk (LuaFunction): Chunk returned by `compile`.
            path (Path): Script path, used in error messages.

        Raises:
            ScriptRuntimeError: If the chunk raises a Lua error or recursion runs away.
        """
        try:
            chunk()
        except LuaError as exc:
            raise ScriptRuntimeError(f"Failed to run {path}: {exc}", path=path) from exc
        except RecursionError as exc:
            raise ScriptRuntimeError(
                f"Failed to run {path}: maximum import depth exceeded", path=path
            ) from exc

    @staticmethod
    def type_name(obj: object) -> str:
        """Return the Lua type name of a value read from a Lua table.

        Args:
            obj (object): A key or value as returned by ``lupa``.

        Returns:
            str: ``"table"``, ``"function"``, ``"userdata"``, ``"thread"`` for Lua
            objects, the Lua name for Python-mapped scalars, or the Python type name
            for foreign Python objects.
        """
        native: str | None = lua_type(obj)
        if native is not None:
            return native
        if obj is None:
            return "nil"
        if isinstance(obj, bool):
            return "boolean"
        if isinstance(obj, (int, float)):
            return "number"
        if isinstance(obj, (str, bytes)):
            return "string"
        return type(obj).__name__
