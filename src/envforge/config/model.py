# envforge:header:start
#
#   project      : EnvForge
#   file         : model.py
#   file_relpath : src/envforge/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Build settings model.

This module defines:
    - `BuildConfig`: an immutable snapshot used by the batch driver.
    - `MutableBuildConfig`: a mutable builder used while applying defaults and
      the optional ``envforge.toml``; it can be frozen into `BuildConfig` and
      thawed back for edits.

Layering (later wins):
    1. Built-in defaults (`envforge.constants`).
    2. ``[output]`` section of ``<input>/envforge.toml``, when present.
    3. Programmatic edits on the mutable builder (tests, API callers).

The input layout (``environments/``, ``apps/``, ``vars/``) is fixed from TOML's
point of view; only API callers may rename the subdirectories.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from envforge.config.io import (
    get_bool_value_checked,
    get_int_value_checked,
    get_table_value,
    load_toml_dict,
)
from envforge.config.logging import get_logger
from envforge.constants import (
    APPS_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_INDENT,
    ENVIRONMENTS_DIR_NAME,
    OUTPUT_SUFFIX,
    SCRIPT_SUFFIX,
    VARS_DIR_NAME,
)

if TYPE_CHECKING:
    from envforge.config.io import TomlTable
    from envforge.config.logging import EnvforgeLogger

logger: EnvforgeLogger = get_logger(__name__)

_OUTPUT_KEYS: frozenset[str] = frozenset({"indent", "sort_keys"})


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Immutable runtime configuration for one build.

    Attributes:
        input_root (Path): Root of the script tree.
        output_root (Path): Directory receiving the documents.
        environments_dir (str): Subdirectory of ``input_root`` holding ``<env>.conf``.
        apps_dir (str): Subdirectory of ``input_root`` holding ``<app>/<env>.conf``.
        vars_dir (str): Subdirectory of ``input_root`` holding shared fragments.
        script_suffix (str): Suffix of every script file.
        output_suffix (str): Suffix of every written document.
        indent (int): JSON indentation width.
        sort_keys (bool): Whether object keys are emitted in sorted order.
        config_files (tuple[Path, ...]): Settings files applied to this config.
    """

    input_root: Path
    output_root: Path
    environments_dir: str
    apps_dir: str
    vars_dir: str
    script_suffix: str
    output_suffix: str
    indent: int
    sort_keys: bool
    config_files: tuple[Path, ...]

    @property
    def environments_path(self) -> Path:
        """Directory holding the environment scripts."""
        return self.input_root / self.environments_dir

    @property
    def apps_path(self) -> Path:
        """Directory holding one subdirectory per application."""
        return self.input_root / self.apps_dir

    @property
    def vars_path(self) -> Path:
        """Directory holding the shared fragments."""
        return self.input_root / self.vars_dir

    def thaw(self) -> MutableBuildConfig:
        """Return a mutable copy of this configuration."""
        return MutableBuildConfig(
            input_root=self.input_root,
            output_root=self.output_root,
            environments_dir=self.environments_dir,
            apps_dir=self.apps_dir,
            vars_dir=self.vars_dir,
            script_suffix=self.script_suffix,
            output_suffix=self.output_suffix,
            indent=self.indent,
            sort_keys=self.sort_keys,
            config_files=list(self.config_files),
        )


@dataclass
class MutableBuildConfig:
    """Mutable builder for `BuildConfig`.

    Attributes:
        input_root (Path): Root of the script tree.
        output_root (Path): Directory receiving the documents.
        environments_dir (str): Environment scripts subdirectory name.
        apps_dir (str): Application overlays subdirectory name.
        vars_dir (str): Shared fragments subdirectory name.
        script_suffix (str): Suffix of every script file.
        output_suffix (str): Suffix of every written document.
        indent (int): JSON indentation width.
        sort_keys (bool): Whether object keys are emitted in sorted order.
        config_files (list[Path]): Settings files applied so far.
    """

    input_root: Path
    output_root: Path
    environments_dir: str = ENVIRONMENTS_DIR_NAME
    apps_dir: str = APPS_DIR_NAME
    vars_dir: str = VARS_DIR_NAME
    script_suffix: str = SCRIPT_SUFFIX
    output_suffix: str = OUTPUT_SUFFIX
    indent: int = DEFAULT_INDENT
    sort_keys: bool = True
    config_files: list[Path] = field(default_factory=lambda: [])

    def freeze(self) -> BuildConfig:
        """Return an immutable snapshot of this builder."""
        return BuildConfig(
            input_root=self.input_root,
            output_root=self.output_root,
            environments_dir=self.environments_dir,
            apps_dir=self.apps_dir,
            vars_dir=self.vars_dir,
            script_suffix=self.script_suffix,
            output_suffix=self.output_suffix,
            indent=self.indent,
            sort_keys=self.sort_keys,
            config_files=tuple(self.config_files),
        )

    def apply_toml_dict(self, data: TomlTable, *, source: str) -> MutableBuildConfig:
        """Apply the ``[output]`` section of a parsed settings file.

        Unknown sections and keys are logged and ignored.

        Args:
            data (TomlTable): Parsed TOML document.
            source (str): Origin of ``data``, used in messages.

        Returns:
            MutableBuildConfig: ``self``, for chaining.

        Raises:
            ConfigError: If a known key has the wrong type or range.
        """
        for section in data:
            if section != "output":
                logger.warning("%s: ignoring unknown section [%s]", source, section)

        output: TomlTable = get_table_value(data, "output", source=source)
        for key in output:
            if key not in _OUTPUT_KEYS:
                logger.warning("%s: ignoring unknown key [output].%s", source, key)

        self.indent = get_int_value_checked(output, "indent", self.indent, source=source, minimum=0)
        self.sort_keys = get_bool_value_checked(output, "sort_keys", self.sort_keys, source=source)
        return self

    @classmethod
    def load(cls, input_root: Path, output_root: Path) -> MutableBuildConfig:
        """Build the layered configuration for an input tree.

        Args:
            input_root (Path): Root of the script tree.
            output_root (Path): Directory receiving the documents.

        Returns:
            MutableBuildConfig: Defaults, overlaid with ``<input_root>/envforge.toml`` if it exists.
        """
        draft = cls(input_root=input_root, output_root=output_root)
        settings_file: Path = input_root / CONFIG_FILE_NAME
        if settings_file.is_file():
            draft.apply_toml_dict(load_toml_dict(settings_file), source=str(settings_file))
            draft.config_files.append(settings_file)
        else:
            logger.debug("No %s in %s, using defaults", CONFIG_FILE_NAME, input_root)
        return draft
