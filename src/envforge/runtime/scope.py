# envforge:header:start
#
#   project      : EnvForge
#   file         : scope.py
#   file_relpath : src/envforge/runtime/scope.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Isolated script scopes, the scope loader and the ``vars`` import resolver.

A `Scope` owns exactly one binding table. Scopes are never chained: a script
sees the standard library, the ``vars`` callable and whatever the host binds
explicitly (e.g. ``env`` in an application scope), nothing else.

The standard library and ``vars`` sit behind the binding table's metatable, so
the table a scope hands back (to the converter, or to a script as the result of
``vars``) only contains the names the script assigned.

`ScopeLoader.load` evaluates one file in a brand-new scope and hands back the
resulting binding table. `ImportResolver` is the host side of ``vars(name)``: it
maps a fragment name to ``<vars_dir>/<name>.conf`` and delegates to the loader.
Imports are not cached and cycles are not detected; a self-importing fragment
recurses until the interpreter's depth limit and fails with
`ScriptRuntimeError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from envforge.config.logging import get_logger
from envforge.constants import IMPORT_BINDING_NAME, SCRIPT_SUFFIX
from envforge.core.errors import ScriptIOError, ScriptLoadError

if TYPE_CHECKING:
    from pathlib import Path

    from envforge.config.logging import EnvforgeLogger
    from envforge.runtime.lua import LuaTable, ScriptRuntime

logger: EnvforgeLogger = get_logger(__name__)


@dataclass(eq=False)
class Scope:
    """An isolated execution context with its own binding table.

    Attributes:
        name (str): Label used in log messages (usually the script stem).
        bindings (LuaTable): The scope's global table; scripts read and write it.
    """

    name: str
    bindings: LuaTable

    def bind(self, key: str, value: object) -> None:
        """Bind ``value`` under ``key`` before a script runs in this scope."""
        self.bindings[key] = value


def read_script(path: Path) -> str:
    """Read a script file as UTF-8 text.

    Args:
        path (Path): Script file.

    Returns:
        str: The source text.

    Raises:
        ScriptIOError: If the file cannot be opened or read.
        ScriptLoadError: If the file is not valid UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ScriptLoadError(f"Failed to load {path}: not valid UTF-8 ({exc})", path=path) from exc
    except OSError as exc:
        raise ScriptIOError(f"Failed to read {path}: {exc.strerror or exc}", path=path) from exc


class ImportResolver:
    """Host implementation of the ``vars(name)`` callable.

    Attributes:
        loader (ScopeLoader): Loader used to evaluate fragments.
        vars_dir (Path): Directory holding the shared fragments.
        suffix (str): File suffix of fragment scripts.
    """

    def __init__(self, loader: ScopeLoader, vars_dir: Path, *, suffix: str = SCRIPT_SUFFIX) -> None:
        self.loader: ScopeLoader = loader
        self.vars_dir: Path = vars_dir
        self.suffix: str = suffix

    def fragment_path(self, name: str) -> Path:
        """Return the file a fragment name resolves to."""
        return self.vars_dir / f"{name}{self.suffix}"

    def __call__(self, name: str) -> LuaTable:
        """Evaluate fragment ``name`` in a fresh scope and return its binding table.

        The table is returned as is; merging is up to the calling script.

        Args:
            name (str): Logical fragment name passed to ``vars``.

        Returns:
            LuaTable: The fragment's binding table.

        Raises:
            ScriptIOError: If the fragment file does not exist.
        """
        path: Path = self.fragment_path(name)
        if not path.is_file():
            raise ScriptIOError(f"Fragment '{name}' not found: {path}", path=path)
        logger.debug("Importing fragment '%s' from %s", name, path)
        return self.loader.load(path)


class ScopeLoader:
    """Evaluate script files in fresh, isolated scopes.

    Attributes:
        runtime (ScriptRuntime): Interpreter adapter shared by all scopes of a composition.
        resolver (ImportResolver): The ``vars`` callable registered into every scope.
    """

    def __init__(
        self,
        runtime: ScriptRuntime,
        vars_dir: Path,
        *,
        suffix: str = SCRIPT_SUFFIX,
    ) -> None:
        self.runtime: ScriptRuntime = runtime
        self.resolver: ImportResolver = ImportResolver(self, vars_dir, suffix=suffix)
        self._depth: int = 0

    def new_scope(self, name: str) -> Scope:
        """Create an empty scope with the standard library and ``vars`` installed.

        Args:
            name (str): Label for log messages.

        Returns:
            Scope: The new scope.
        """
        table: LuaTable = self.runtime.new_table()
        library: LuaTable = self.runtime.install_stdlib(table)
        self.runtime.register_callable(library, IMPORT_BINDING_NAME, self.resolver)
        return Scope(name=name, bindings=table)

    def run(self, scope: Scope, path: Path) -> LuaTable:
        """Execute the script at ``path`` in ``scope``.

        Args:
            scope (Scope): Scope to run in; its bindings receive the script's globals.
            path (Path): Script file.

        Returns:
            LuaTable: The scope's binding table after the script ran.

        Raises:
            ScriptIOError: If the file cannot be read.
            ScriptLoadError: If the file cannot be parsed or compiled.
            ScriptRuntimeError: If the script raises while executing.
        """
        source: str = read_script(path)
        chunk = self.runtime.compile(source, path=path, table=scope.bindings)
        logger.trace("Running %s in scope '%s' (depth %d)", path, scope.name, self._depth)
        self._depth += 1
        try:
            self.runtime.call(chunk, path=path)
        finally:
            self._depth -= 1
        return scope.bindings

    def load(self, path: Path) -> LuaTable:
        """Evaluate ``path`` in a brand-new scope and return its binding table.

        Args:
            path (Path): Script file.

        Returns:
            LuaTable: The binding table; the scope itself is discarded.
        """
        logger.debug("Loading %s", path)
        return self.run(self.new_scope(path.stem), path)
