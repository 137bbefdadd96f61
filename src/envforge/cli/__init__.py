# envforge:header:start
#
#   project      : EnvForge
#   file         : __init__.py
#   file_relpath : src/envforge/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Command-line interface for EnvForge.

The CLI is a single Click command (`envforge.cli.main.cli`) taking the input
root and the output root. Core errors are mapped onto Click exceptions with
sysexits-aligned exit codes in `envforge.cli.errors`.
"""

from __future__ import annotations
