"""
Chunkscribe - timestamped transcription of long audio through a remote
speech-to-text API.

Oversized inputs are split into fixed-length chunks with FFmpeg, each chunk is
sent to a Whisper-compatible endpoint, and the per-chunk segments are shifted
onto the original timeline and appended to a single transcript file.
"""

__version__ = "0.1.0"
