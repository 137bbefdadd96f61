# envforge:header:start
#
#   project      : EnvForge
#   file         : main.py
#   file_relpath : src/envforge/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""EnvForge Click command.

The command takes exactly two positional arguments, the input root and the
output root. Logging is configured from ``ENVFORGE_LOG_LEVEL``; there are no
other options besides ``-h/--help``, so any unknown option or missing argument
is a Click usage error (exit code 2).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from envforge.build import run_build
from envforge.cli.console import ClickConsole
from envforge.cli.errors import to_cli_error
from envforge.config.logging import get_logger, resolve_env_log_level, setup_logging
from envforge.config.model import MutableBuildConfig
from envforge.core.errors import EnvforgeError

if TYPE_CHECKING:
    from envforge.build import BuildReport
    from envforge.config.logging import EnvforgeLogger
    from envforge.config.model import BuildConfig
    from envforge.layout import Composition
    from envforge.writer import WriteResult

logger: EnvforgeLogger = get_logger(__name__)


@click.command(
    name="envforge",
    context_settings={"help_option_names": ["-h", "--help"]},
    help=(
        "Compile the Lua configuration tree in INPUT_DIR into one JSON document "
        "per (application, environment) pair, written to OUTPUT_DIR as <app>_<env>.json."
    ),
)
@click.argument(
    "input_dir",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.argument(
    "output_dir",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
)
@click.pass_context
def cli(ctx: click.Context, input_dir: Path, output_dir: Path) -> None:
    """Entry point for the EnvForge CLI."""
    ctx.obj = ctx.obj or {}

    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    console = ClickConsole()
    ctx.obj["console"] = console

    def report_written(composition: Composition, result: WriteResult) -> None:
        console.print(f"{composition.label}: {result.path}")

    try:
        config: BuildConfig = MutableBuildConfig.load(input_dir, output_dir).freeze()
        report: BuildReport = run_build(config, on_written=report_written)
    except EnvforgeError as exc:
        logger.debug("Build aborted: %r", exc)
        raise to_cli_error(exc) from exc

    console.print(
        console.styled(f"{len(report.written)} document(s) written to {output_dir}", fg="green")
    )


if __name__ == "__main__":
    cli()
