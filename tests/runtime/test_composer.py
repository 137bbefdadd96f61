# envforge:header:start
#
#   project      : EnvForge
#   file         : test_composer.py
#   file_relpath : tests/runtime/test_composer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Tests for `envforge.runtime.composer.ScopeComposer`."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from envforge.core.errors import ScriptRuntimeError
from envforge.layout import Composition
from envforge.runtime.composer import ScopeComposer
from envforge.runtime.converter import ValueConverter
from tests.conftest import write_tree

if TYPE_CHECKING:
    from pathlib import Path

    from envforge.runtime.scope import ScopeLoader


def _composition(root: Path, env_source: str, app_source: str) -> Composition:
    write_tree(
        root,
        {
            "environments/prod.conf": env_source,
            "apps/web/prod.conf": app_source,
        },
    )
    return Composition(
        env_name="prod",
        app_name="web",
        env_script=root / "environments" / "prod.conf",
        app_script=root / "apps" / "web" / "prod.conf",
    )


def test_env_is_bound_in_app_scope(loader: ScopeLoader, tmp_path: Path) -> None:
    """The overlay reads environment bindings through ``env``."""
    composition = _composition(
        tmp_path,
        'HOST = "a.example.com"\n',
        'ENDPOINT = env.HOST .. "/api"\n',
    )

    bindings = ScopeComposer(loader).compose(composition)

    assert bindings["ENDPOINT"] == "a.example.com/api"
    assert ValueConverter().convert(bindings, composition.label, uckeysonly=True) == {
        "ENDPOINT": "a.example.com/api"
    }


def test_env_name_overrides_script_value(loader: ScopeLoader, tmp_path: Path) -> None:
    """``env.name`` is the environment name, even if the script defined ``name``."""
    composition = _composition(
        tmp_path,
        'name = "overridden"\nSEEN_NAME = name\n',
        "NAME = env.name\nSEEN = env.SEEN_NAME\n",
    )

    bindings = ScopeComposer(loader).compose(composition)

    assert bindings["NAME"] == "prod"
    # `name` is set only after the environment script finished running.
    assert bindings["SEEN"] == "overridden"


def test_env_globals_do_not_leak(loader: ScopeLoader, tmp_path: Path) -> None:
    """Environment globals are only reachable through ``env``."""
    composition = _composition(tmp_path, "HOST = 'h'\n", "LEAK = HOST\n")

    bindings = ScopeComposer(loader).compose(composition)

    assert bindings["LEAK"] is None


def test_env_script_cannot_see_app_bindings(loader: ScopeLoader, tmp_path: Path) -> None:
    """The environment script runs without an ``env`` binding of its own."""
    composition = _composition(tmp_path, "HAS_ENV = (env ~= nil)\n", "X = env.HAS_ENV\n")

    bindings = ScopeComposer(loader).compose(composition)

    assert bindings["X"] is False


def test_app_and_env_can_import_fragments(
    loader: ScopeLoader, vars_dir: Path, tmp_path: Path
) -> None:
    """Both scopes receive their own ``vars`` callable."""
    write_tree(vars_dir, {"shared.conf": "TIMEOUT = 30\n"})
    composition = _composition(
        tmp_path,
        "DEFAULTS = vars('shared')\n",
        "COMMON = vars('shared')\nFROM_ENV = env.DEFAULTS.TIMEOUT\n",
    )

    bindings = ScopeComposer(loader).compose(composition)

    assert ValueConverter().convert(bindings, composition.label, uckeysonly=True) == {
        "COMMON": {"TIMEOUT": 30},
        "FROM_ENV": 30,
    }


def test_app_runtime_error_propagates(loader: ScopeLoader, tmp_path: Path) -> None:
    """A failing overlay raises `ScriptRuntimeError`."""
    composition = _composition(tmp_path, "A = 1\n", "B = env.MISSING.FIELD\n")

    with pytest.raises(ScriptRuntimeError):
        ScopeComposer(loader).compose(composition)


def test_env_nested_as_value(loader: ScopeLoader, tmp_path: Path) -> None:
    """Exporting ``env`` itself yields the environment's own bindings plus ``name``."""
    composition = _composition(tmp_path, "HOST = 'h'\nlocal tmp = 1\n", "E = env\n")

    bindings = ScopeComposer(loader).compose(composition)

    assert ValueConverter().convert(bindings, composition.label, uckeysonly=True) == {
        "E": {"HOST": "h", "name": "prod"}
    }
