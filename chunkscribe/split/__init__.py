"""
chunkscribe.split - Size-based chunk planning and FFmpeg splitting.

Files above the upload limit are cut into fixed-duration chunks by stream
copy. Each chunk carries the nominal duration used to advance the transcript
time offset.
"""

from __future__ import annotations
