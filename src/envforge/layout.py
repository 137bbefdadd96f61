# envforge:header:start
#
#   project      : EnvForge
#   file         : layout.py
#   file_relpath : src/envforge/layout.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Input tree layout and (application, environment) pair enumeration.

Expected layout below the input root::

    environments/<env>.conf      one script per environment
    apps/<app>/<env>.conf        optional overlay per (app, env) pair
    vars/<name>.conf             shared fragments, only reached through vars()

A pair is composed only when both its environment script and its overlay
exist. Environments are visited in file-name order and applications in
directory-name order; callers must not rely on this order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from envforge.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from envforge.config.logging import EnvforgeLogger
    from envforge.config.model import BuildConfig

logger: EnvforgeLogger = get_logger(__name__)


@dataclass(frozen=True)
class Composition:
    """One (environment, application) pair to compile.

    Attributes:
        env_name (str): Environment name (stem of the environment script).
        app_name (str): Application name (name of its directory).
        env_script (Path): Environment script path.
        app_script (Path): Application overlay path.
    """

    env_name: str
    app_name: str
    env_script: Path
    app_script: Path

    @property
    def label(self) -> str:
        """Root of the diagnostic paths of this composition, ``<app>.<env>``."""
        return f"{self.app_name}.{self.env_name}"

    def output_name(self, suffix: str) -> str:
        """Return the document file name, ``<app>_<env><suffix>``."""
        return f"{self.app_name}_{self.env_name}{suffix}"


def list_environments(config: BuildConfig) -> list[tuple[str, Path]]:
    """Return ``(name, script)`` for every environment script, sorted by name.

    Args:
        config (BuildConfig): Build settings.

    Returns:
        list[tuple[str, Path]]: Environment names and script paths.
    """
    root: Path = config.environments_path
    if not root.is_dir():
        logger.warning("No environments directory: %s", root)
        return []
    scripts: list[Path] = sorted(
        p for p in root.glob(f"*{config.script_suffix}") if p.is_file()
    )
    return [(p.name[: -len(config.script_suffix)], p) for p in scripts]


def list_apps(config: BuildConfig) -> list[str]:
    """Return the application names (subdirectories of the apps directory), sorted.

    Args:
        config (BuildConfig): Build settings.

    Returns:
        list[str]: Application names.
    """
    root: Path = config.apps_path
    if not root.is_dir():
        logger.warning("No apps directory: %s", root)
        return []
    return sorted(p.name for p in root.iterdir() if p.is_dir())


def iter_compositions(config: BuildConfig) -> Iterator[Composition]:
    """Yield every pair whose environment script and overlay both exist.

    Args:
        config (BuildConfig): Build settings.

    Yields:
        Composition: The pairs to compile.
    """
    apps: list[str] = list_apps(config)
    for env_name, env_script in list_environments(config):
        for app_name in apps:
            app_script: Path = config.apps_path / app_name / f"{env_name}{config.script_suffix}"
            if not app_script.is_file():
                logger.debug("Skipping %s.%s: no overlay %s", app_name, env_name, app_script)
                continue
            yield Composition(
                env_name=env_name,
                app_name=app_name,
                env_script=env_script,
                app_script=app_script,
            )
