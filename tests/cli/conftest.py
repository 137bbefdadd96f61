# envforge:header:start
#
#   project      : EnvForge
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""CLI test helpers for running EnvForge through Click's test runner."""

from __future__ import annotations

from typing import TYPE_CHECKING

from click.testing import CliRunner, Result

from envforge.cli.exit_codes import ExitCode
from envforge.cli.main import cli

if TYPE_CHECKING:
    from collections.abc import Sequence


def run_cli(argv: Sequence[str]) -> Result:
    """Invoke the CLI with ``argv``.

    Args:
        argv (Sequence[str]): CLI argument vector, e.g. ``[str(src), str(out)]``.

    Returns:
        Result: The `click.testing.Result` produced by `click.testing.CliRunner.invoke`.

    Example:
        ```python
        result = run_cli(["--help"])
        assert result.exit_code == ExitCode.SUCCESS
        ```
    """
    runner = CliRunner()
    return runner.invoke(cli, list(argv))


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0).

    Args:
        result (Result): The Result object returned by `run_cli`.
    """
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_exit_code(result: Result, expected: ExitCode) -> None:
    """Assert that the command exited with ``expected`` through a Click exception.

    Args:
        result (Result): The Result object returned by `run_cli`.
        expected (ExitCode): Expected exit code.
    """
    assert result.exit_code == expected, result.output
