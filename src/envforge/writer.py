# envforge:header:start
#
#   project      : EnvForge
#   file         : writer.py
#   file_relpath : src/envforge/writer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Document rendering and writing.

Documents are rendered as JSON: deterministic key order (sorted by default),
fixed indentation, non-ASCII kept as is, and a trailing newline, so that the
output is stable and diffable. Booleans come out as ``true``/``false`` and
never as ``1``/``0``.

Each document is written as soon as its pair is converted; nothing is rolled
back when a later pair fails.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

from envforge.config.logging import get_logger
from envforge.core.errors import OutputIOError

if TYPE_CHECKING:
    from pathlib import Path

    from envforge.config.logging import EnvforgeLogger
    from envforge.core.values import DocValue

logger: EnvforgeLogger = get_logger(__name__)


@dataclass
class WriteResult:
    """Structured result of a write operation."""

    path: Path
    bytes_written: int = 0


def render_document(doc: DocValue, *, indent: int, sort_keys: bool) -> str:
    """Render a document value as JSON text.

    Args:
        doc (DocValue): Canonical document value.
        indent (int): Indentation width.
        sort_keys (bool): Whether to sort object keys.

    Returns:
        str: The JSON text, newline-terminated.

    Raises:
        ValueError: If ``doc`` contains NaN or an infinity, which JSON cannot express.
    """
    text: str = json.dumps(
        doc, indent=indent, sort_keys=sort_keys, ensure_ascii=False, allow_nan=False
    )
    return text + "\n"


def write_document(doc: DocValue, path: Path, *, indent: int, sort_keys: bool) -> WriteResult:
    """Render ``doc`` and write it to ``path``, creating parent directories.

    Args:
        doc (DocValue): Canonical document value.
        path (Path): Destination file.
        indent (int): Indentation width.
        sort_keys (bool): Whether to sort object keys.

    Returns:
        WriteResult: The written path and the number of UTF-8 bytes written.

    Raises:
        OutputIOError: If the directory cannot be created or the file cannot be written.
    """
    text: str = render_document(doc, indent=indent, sort_keys=sort_keys)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
    except OSError as exc:
        raise OutputIOError(f"Failed to write {path}: {exc.strerror or exc}", path=path) from exc
    bytes_written: int = len(text.encode("utf-8"))
    logger.debug("Wrote %d bytes to %s", bytes_written, path)
    return WriteResult(path=path, bytes_written=bytes_written)
