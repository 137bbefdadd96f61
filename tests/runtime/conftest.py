# envforge:header:start
#
#   project      : EnvForge
#   file         : conftest.py
#   file_relpath : tests/runtime/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Fixtures for runtime tests: a fresh Lua runtime, a scope loader and a Lua table builder."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

import pytest

from envforge.runtime.lua import ScriptRuntime
from envforge.runtime.scope import ScopeLoader

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def runtime() -> ScriptRuntime:
    """Return a fresh Lua runtime."""
    return ScriptRuntime()


@pytest.fixture
def vars_dir(tmp_path: Path) -> Path:
    """Return an (initially empty) shared fragments directory."""
    path: Path = tmp_path / "vars"
    path.mkdir()
    return path


@pytest.fixture
def loader(runtime: ScriptRuntime, vars_dir: Path) -> ScopeLoader:
    """Return a scope loader resolving fragments in ``vars_dir``."""
    return ScopeLoader(runtime, vars_dir)


@pytest.fixture
def lua_value(runtime: ScriptRuntime) -> Callable[[str], Any]:
    """Return a helper evaluating a Lua expression into a ``lupa`` value.

    Example:
        ``lua_value("{1, 2, FOO = 'x'}")``
    """

    def _eval(expression: str) -> Any:
        return runtime.lua.execute(f"return {expression}")

    return _eval
