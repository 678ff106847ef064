"""
chunkscribe.io - Transcript file helpers.

The transcript is append-only: existing content at the output path is kept
and new lines are added after it.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


def append_lines(path: Path, lines: Iterable[str]) -> None:
    """Append lines to a UTF-8 text file, one per line.

    Args:
        path: Destination path (created if missing)
        lines: Lines without trailing newlines; "" writes a blank line
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        for line in lines:
            f.write(f"{line}\n")


def remove_file(path: Path) -> bool:
    """Delete a file if it exists.

    Returns:
        True if a file was removed, False if it was already gone
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True
