# envforge:header:start
#
#   project      : EnvForge
#   file         : build.py
#   file_relpath : src/envforge/build.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Batch driver: compile every (application, environment) pair of an input tree.

For each pair, in order:
    1. create a fresh Lua runtime (nothing is shared between pairs);
    2. compose the environment and application scopes (`ScopeComposer`);
    3. convert the application bindings with top-level key filtering
       (`ValueConverter`);
    4. write ``<output>/<app>_<env>.json``.

The first error aborts the whole run. Documents written for earlier pairs stay
on disk.

Example:
    ```python
    from pathlib import Path
    from envforge.build import run_build
    from envforge.config import MutableBuildConfig

    config = MutableBuildConfig.load(Path("conf"), Path("build")).freeze()
    report = run_build(config)
    print(len(report.written))
    ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from envforge.config.logging import get_logger
from envforge.layout import iter_compositions
from envforge.runtime.composer import ScopeComposer
from envforge.runtime.converter import ValueConverter
from envforge.runtime.lua import ScriptRuntime
from envforge.runtime.scope import ScopeLoader
from envforge.writer import write_document

if TYPE_CHECKING:
    from pathlib import Path

    from envforge.config.logging import EnvforgeLogger
    from envforge.config.model import BuildConfig
    from envforge.core.values import DocValue
    from envforge.layout import Composition
    from envforge.runtime.lua import LuaTable
    from envforge.writer import WriteResult

logger: EnvforgeLogger = get_logger(__name__)

WrittenCallback = Callable[["Composition", "WriteResult"], None]


@dataclass
class BuildReport:
    """Outcome of a successful build.

    Attributes:
        written (list[WriteResult]): One entry per document, in write order.
    """

    written: list[WriteResult] = field(default_factory=lambda: [])


def compile_composition(config: BuildConfig, composition: Composition) -> DocValue:
    """Evaluate and convert one pair into its document value.

    Args:
        config (BuildConfig): Build settings.
        composition (Composition): The pair to compile.

    Returns:
        DocValue: The document for this pair.
    """
    runtime = ScriptRuntime()
    loader = ScopeLoader(runtime, config.vars_path, suffix=config.script_suffix)
    bindings: LuaTable = ScopeComposer(loader).compose(composition)
    return ValueConverter().convert(bindings, composition.label, uckeysonly=True)


def run_build(config: BuildConfig, *, on_written: WrittenCallback | None = None) -> BuildReport:
    """Compile and write every pair of the input tree.

    Args:
        config (BuildConfig): Build settings.
        on_written (WrittenCallback | None): Called after each document is written.

    Returns:
        BuildReport: The written documents.

    Raises:
        EnvforgeError: The first error met; no further pairs are processed.
    """
    report = BuildReport()
    for composition in iter_compositions(config):
        doc: DocValue = compile_composition(config, composition)
        target: Path = config.output_root / composition.output_name(config.output_suffix)
        result: WriteResult = write_document(
            doc, target, indent=config.indent, sort_keys=config.sort_keys
        )
        report.written.append(result)
        if on_written is not None:
            on_written(composition, result)
    logger.info("Wrote %d document(s) to %s", len(report.written), config.output_root)
    return report
