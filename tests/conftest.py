# envforge:header:start
#
#   project      : EnvForge
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Pytest configuration for the EnvForge test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
and provides helpers to lay out script trees under ``tmp_path``.

Notes:
    Build configs in tests with `make_config`, which starts from a
    `envforge.config.MutableBuildConfig` (mutable) and `freeze()`s it into a
    `envforge.config.BuildConfig` for `envforge.build.run_build`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from envforge.config import MutableBuildConfig, logging
from envforge.constants import LOG_LEVEL_ENV_VAR

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from envforge.config import BuildConfig

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


@pytest.fixture(autouse=True)
def silence_envforge_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure EnvForge's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE so detailed output is captured during test execution.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


def write_tree(root: Path, files: Mapping[str, str]) -> Path:
    """Create text files below ``root``.

    Args:
        root (Path): Directory to populate (created if missing).
        files (Mapping[str, str]): Relative POSIX path -> file content.

    Returns:
        Path: ``root``.
    """
    for relpath, content in files.items():
        target: Path = root / relpath
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    root.mkdir(parents=True, exist_ok=True)
    return root


def make_config(input_root: Path, output_root: Path, **overrides: Any) -> BuildConfig:
    """Return a frozen `BuildConfig` built from defaults, ``envforge.toml`` and overrides.

    Args:
        input_root (Path): Root of the script tree.
        output_root (Path): Output directory.
        **overrides (Any): Attributes set on the mutable builder before freezing.

    Returns:
        BuildConfig: An immutable configuration snapshot for use in tests.
    """
    m: MutableBuildConfig = MutableBuildConfig.load(input_root, output_root)
    for k, v in overrides.items():
        setattr(m, k, v)
    return m.freeze()
