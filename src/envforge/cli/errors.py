# envforge:header:start
#
#   project      : EnvForge
#   file         : errors.py
#   file_relpath : src/envforge/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Exceptions for the EnvForge CLI.

Usage:
    Core code raises `envforge.core.errors.EnvforgeError` subclasses; the command
    converts them with `to_cli_error` so that Click prints the message and exits
    with the matching `ExitCode`.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from envforge.cli.exit_codes import ExitCode
from envforge.core.errors import (
    ConfigError,
    ConversionError,
    EnvforgeError,
    OutputIOError,
    ScriptIOError,
    ScriptLoadError,
    ScriptRuntimeError,
)


class EnvforgeCliError(click.ClickException):
    """Base class for all EnvForge CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorization happens in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(f"Error: {self.format_message()}")
                return
        super().show(file)


class EnvforgeScriptError(EnvforgeCliError):
    """A script failed to load or raised while running."""

    exit_code = ExitCode.DATA_ERROR


class EnvforgeConversionError(EnvforgeCliError):
    """A script value could not be converted into a document value."""

    exit_code = ExitCode.DATA_ERROR


class EnvforgeIOError(EnvforgeCliError):
    """A script could not be read or a document could not be written."""

    exit_code = ExitCode.IO_ERROR


class EnvforgeConfigError(EnvforgeCliError):
    """``envforge.toml`` is malformed."""

    exit_code = ExitCode.CONFIG_ERROR


def to_cli_error(exc: EnvforgeError) -> EnvforgeCliError:
    """Map a core error onto the CLI error carrying its exit code.

    Args:
        exc (EnvforgeError): Error raised by the build.

    Returns:
        EnvforgeCliError: The CLI error to raise.
    """
    message: str = exc.message
    if isinstance(exc, (ScriptLoadError, ScriptRuntimeError)):
        return EnvforgeScriptError(message)
    if isinstance(exc, ConversionError):
        return EnvforgeConversionError(message)
    if isinstance(exc, (ScriptIOError, OutputIOError)):
        return EnvforgeIOError(message)
    if isinstance(exc, ConfigError):
        return EnvforgeConfigError(message)
    return EnvforgeCliError(message)
