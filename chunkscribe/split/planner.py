"""
chunkscribe.split.planner - Decide whether to split and describe the chunks.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from chunkscribe.exceptions import NoChunksError


class ChunkDescriptor(BaseModel):
    """One audio file to transcribe and its place on the original timeline."""

    model_config = ConfigDict(frozen=True)

    path: Path
    index: int = Field(ge=0)
    nominal_duration_seconds: int = Field(gt=0)
    is_split: bool = True


def needs_splitting(file_size: int, max_size: int) -> bool:
    """Return True when a file is strictly larger than the upload limit."""
    return file_size > max_size


def plan_chunks(paths: list[Path], nominal_duration: int) -> list[ChunkDescriptor]:
    """Describe split output in chronological order.

    Chunk files are numbered with zero-padded sequence numbers, so sorting by
    name gives playback order.

    Raises:
        NoChunksError: If the splitter produced no files
    """
    if not paths:
        raise NoChunksError(
            "No chunks were created. Please check the input file and splitting parameters."
        )
    ordered = sorted(paths, key=lambda p: p.name)
    return [
        ChunkDescriptor(path=path, index=i, nominal_duration_seconds=nominal_duration)
        for i, path in enumerate(ordered)
    ]


def single_chunk(path: Path, nominal_duration: int) -> ChunkDescriptor:
    """Describe an unsplit input file as a lone chunk at offset 0."""
    return ChunkDescriptor(
        path=path,
        index=0,
        nominal_duration_seconds=nominal_duration,
        is_split=False,
    )
