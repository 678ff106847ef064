"""
chunkscribe.utils - Shared utility functions.
"""

from __future__ import annotations


def format_timestamp(seconds: float) -> str:
    """Format seconds as zero-padded HH:MM:SS.

    The fractional part is discarded and hours do not wrap at 24.

    Args:
        seconds: Non-negative time in seconds

    Returns:
        Formatted string, e.g. "01:01:01" for 3661
    """
    total = int(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_size(size: int) -> str:
    """Format a byte count in human-readable form."""
    value = float(size)
    for unit in ["B", "KB", "MB", "GB"]:
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} TB"
