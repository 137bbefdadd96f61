# envforge:header:start
#
#   project      : EnvForge
#   file         : __main__.py
#   file_relpath : src/envforge/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Module entry point for running EnvForge via ``python -m envforge``.

It delegates directly to :func:`envforge.cli.main.cli`, ensuring a single,
authoritative CLI entry point regardless of how EnvForge is launched.

Examples:
    Compile a configuration tree using the module interface::

        python -m envforge config/ build/
"""

from __future__ import annotations

from envforge.cli.main import cli

if __name__ == "__main__":
    cli()
