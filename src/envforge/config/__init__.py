# envforge:header:start
#
#   project      : EnvForge
#   file         : __init__.py
#   file_relpath : src/envforge/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Configuration handling for EnvForge.

Build settings come from built-in defaults, optionally overlaid with the
``[output]`` section of ``<input>/envforge.toml``. Logging is configured from the
``ENVFORGE_LOG_LEVEL`` environment variable (see `envforge.config.logging`).
"""

from __future__ import annotations

from envforge.config.model import BuildConfig, MutableBuildConfig

__all__: list[str] = [
    "BuildConfig",
    "MutableBuildConfig",
]
