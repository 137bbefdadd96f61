# envforge:header:start
#
#   project      : EnvForge
#   file         : __init__.py
#   file_relpath : src/envforge/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""EnvForge package.

EnvForge compiles a tree of Lua configuration scripts (environments,
per-application overlays and shared fragments) into one JSON document per
(application, environment) pair. It exposes a CLI and a small typed API
(`envforge.build.run_build`) for automation.
"""

from __future__ import annotations
