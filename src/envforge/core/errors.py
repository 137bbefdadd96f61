# envforge:header:start
#
#   project      : EnvForge
#   file         : errors.py
#   file_relpath : src/envforge/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Core exceptions raised while compiling configuration scripts.

These exceptions are independent of Click. The CLI translates them into
`envforge.cli.errors.EnvforgeCliError` subclasses carrying exit codes.

Every error is fatal to the whole build: the batch driver lets the first one
propagate and documents written before it stay on disk.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class EnvforgeError(Exception):
    """Base class for all EnvForge errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message: str = message

    def __str__(self) -> str:
        return self.message


class ScriptError(EnvforgeError):
    """Error tied to a specific script file."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path: Path | None = path


class ScriptLoadError(ScriptError):
    """A script could not be parsed or compiled."""


class ScriptRuntimeError(ScriptError):
    """A script raised an error while executing.

    This includes misuse of the ``vars`` import callable and runaway recursive imports.
    """


class ScriptIOError(ScriptError):
    """A script or fragment file could not be read."""


class ConversionError(EnvforgeError):
    """A script value could not be converted into a document value.

    Attributes:
        path (str): Diagnostic path of the offending value (e.g. ``web.prod.PORTS[3]``).
    """

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path: str = path


class OutputIOError(EnvforgeError):
    """A document could not be written."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path: Path = path


class ConfigError(EnvforgeError):
    """The optional ``envforge.toml`` settings file is malformed."""
