"""
chunkscribe.transcribe - Remote Whisper transcription.

Sends audio files to a Whisper-compatible HTTP endpoint and parses the
verbose_json response into timestamped segments.
"""

from __future__ import annotations
