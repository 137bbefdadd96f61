# envforge:header:start
#
#   project      : EnvForge
#   file         : __init__.py
#   file_relpath : src/envforge/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Core, UI-agnostic primitives shared across EnvForge.

Included modules:

- ``errors``
  The exception taxonomy raised while loading, running and converting scripts
  and while writing documents.

- ``values``
  The canonical document value model (`DocValue`) produced by the
  converter and consumed by the writer.

This package has no dependency on Click or on the Lua runtime.
"""

from __future__ import annotations
