"""
chunkscribe.validation - Input and dependency checks.

Validates the input file and the FFmpeg toolchain before processing.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Any

from chunkscribe.exceptions import DependencyError, InputMissingError

FFMPEG_INSTALL_HINT = "Install with: brew install ffmpeg (macOS) or apt install ffmpeg (Linux)"


def validate_input_file(path: Path) -> dict[str, Any]:
    """Validate the input audio file exists and is a regular file.

    Args:
        path: Path to audio file

    Returns:
        Dict with 'path' and 'size_bytes'

    Raises:
        InputMissingError: If file doesn't exist or is a directory
    """
    if not path.exists():
        raise InputMissingError(f"File not found: {path}")

    if not path.is_file():
        raise InputMissingError(f"Not a file: {path}")

    return {
        "path": str(path),
        "size_bytes": path.stat().st_size,
    }


def _tool_version(tool_path: str) -> str:
    try:
        proc = subprocess.run(
            [tool_path, "-version"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        version_line = proc.stdout.split("\n")[0]
        return version_line.split()[2] if version_line else "unknown"
    except (subprocess.TimeoutExpired, IndexError, OSError):
        return "unknown"


def check_ffmpeg(require_ffprobe: bool = False) -> dict[str, str]:
    """Check that FFmpeg (and optionally FFprobe) is installed and get versions.

    Args:
        require_ffprobe: Also require ffprobe, needed for measured chunk durations

    Returns:
        Dict with 'ffmpeg_version' and, when checked, 'ffprobe_version'

    Raises:
        DependencyError: If a required tool is not found
    """
    result = {}

    ffmpeg_path = shutil.which("ffmpeg")
    if not ffmpeg_path:
        raise DependencyError("ffmpeg", "FFmpeg not found in PATH", FFMPEG_INSTALL_HINT)
    result["ffmpeg_version"] = _tool_version(ffmpeg_path)

    if require_ffprobe:
        ffprobe_path = shutil.which("ffprobe")
        if not ffprobe_path:
            raise DependencyError("ffprobe", "FFprobe not found in PATH", FFMPEG_INSTALL_HINT)
        result["ffprobe_version"] = _tool_version(ffprobe_path)

    return result
