"""
chunkscribe.merge - Shift chunk segments onto the original timeline.

Each chunk's segments are offset by the chunk's start time, rendered as
"[HH:MM:SS - HH:MM:SS] text" lines, and appended to the transcript followed
by one blank separator line.
"""

from __future__ import annotations

from pathlib import Path

from chunkscribe.io import append_lines
from chunkscribe.transcribe.models import TranscriptionResult, TranscriptionSegment
from chunkscribe.utils import format_timestamp


def format_segment_line(segment: TranscriptionSegment, offset: float) -> str:
    """Render one segment with its times shifted by offset."""
    start = format_timestamp(segment.start + offset)
    end = format_timestamp(segment.end + offset)
    return f"[{start} - {end}] {segment.text.strip()}"


def render_segments(result: TranscriptionResult, offset: float) -> list[str]:
    """Render all segments of a result, in received order."""
    return [format_segment_line(segment, offset) for segment in result.segments]


def merge_segments(result: TranscriptionResult, offset: float, output_path: Path) -> list[str]:
    """Append a chunk's timestamped lines to the transcript.

    A result without segments writes nothing; the caller is expected to
    surface result.text instead.

    Args:
        result: Transcription of one chunk
        offset: Seconds between the original file start and the chunk start
        output_path: Transcript file, appended to

    Returns:
        Lines written, without the blank separator
    """
    if not result.has_segments:
        return []

    lines = render_segments(result, offset)
    append_lines(output_path, [*lines, ""])
    return lines
