"""
chunkscribe.split.ffmpeg - FFmpeg segmenting and FFprobe duration lookup.

All external commands go through a CommandRunner so tests can substitute a
fake that never touches the filesystem or spawns processes.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Protocol

from chunkscribe.exceptions import SplitError
from chunkscribe.io import remove_file
from chunkscribe.logging import get_logger

logger = get_logger("split")


class CommandRunner(Protocol):
    """Runs an external command to completion and reports its exit status."""

    def run(self, cmd: list[str]) -> subprocess.CompletedProcess: ...


class SubprocessRunner:
    """CommandRunner backed by subprocess.run. No timeout is applied."""

    def run(self, cmd: list[str]) -> subprocess.CompletedProcess:
        logger.debug(f"Running: {' '.join(cmd)}")
        return subprocess.run(cmd, capture_output=True, text=True)


def build_split_command(
    input_path: Path,
    segment_seconds: int,
    output_pattern: Path,
) -> list[str]:
    """Build the ffmpeg command that cuts input into fixed-length chunks.

    Streams are copied, not re-encoded, so the chunk container must match
    the input's.
    """
    return [
        "ffmpeg",
        "-hide_banner",
        "-y",
        "-i",
        str(input_path),
        "-f",
        "segment",
        "-segment_time",
        str(segment_seconds),
        "-c",
        "copy",
        str(output_pattern),
    ]


def split_audio(
    input_path: Path,
    chunk_dir: Path,
    segment_seconds: int,
    prefix: str = "chunk_",
    extension: str | None = None,
    runner: CommandRunner | None = None,
) -> list[Path]:
    """Split an audio file into <prefix><NNN>.<ext> chunks.

    Args:
        input_path: Source audio file
        chunk_dir: Directory receiving the chunk files
        segment_seconds: Nominal chunk length
        prefix: Chunk file name prefix
        extension: Chunk extension without dot; defaults to the input's
        runner: Command runner (subprocess by default)

    Returns:
        Chunk files from this run sorted by name (may be empty). Earlier
        <prefix>*.<ext> files in chunk_dir are removed first.

    Raises:
        SplitError: If ffmpeg exits with a non-zero status
    """
    runner = runner or SubprocessRunner()
    ext = (extension or input_path.suffix.lstrip(".") or "mp3").lstrip(".")

    chunk_dir.mkdir(parents=True, exist_ok=True)
    for stale in list(chunk_dir.glob(f"{prefix}*.{ext}")):
        logger.warning(f"Removing leftover chunk {stale}")
        remove_file(stale)

    pattern = chunk_dir / f"{prefix}%03d.{ext}"
    cmd = build_split_command(input_path, segment_seconds, pattern)

    try:
        proc = runner.run(cmd)
    except OSError as e:
        raise SplitError(f"Failed to split audio: {e}") from e

    if proc.returncode != 0:
        raise SplitError(f"Failed to split audio: {proc.stderr}")

    chunks = sorted(chunk_dir.glob(f"{prefix}*.{ext}"), key=lambda p: p.name)
    logger.debug(f"ffmpeg produced {len(chunks)} chunk(s) in {chunk_dir}")
    return chunks


def probe_duration(path: Path, runner: CommandRunner | None = None) -> float:
    """Return the duration of a media file in seconds using ffprobe.

    Raises:
        SplitError: If ffprobe fails or reports no duration
    """
    runner = runner or SubprocessRunner()
    cmd = [
        "ffprobe",
        "-v",
        "quiet",
        "-print_format",
        "json",
        "-show_format",
        str(path),
    ]
    try:
        proc = runner.run(cmd)
    except OSError as e:
        raise SplitError(f"ffprobe failed for {path}: {e}") from e
    if proc.returncode != 0:
        raise SplitError(f"ffprobe failed for {path}: {proc.stderr}")

    try:
        data = json.loads(proc.stdout)
        return float(data["format"]["duration"])
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise SplitError(f"ffprobe returned no duration for {path}") from e
