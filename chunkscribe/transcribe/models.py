"""
chunkscribe.transcribe.models - Transcription response models.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TranscriptionSegment(BaseModel):
    """One timestamped unit of text, times in seconds from the file start."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    start: float = Field(ge=0.0)
    end: float = Field(ge=0.0)
    text: str = ""

    @model_validator(mode="before")
    @classmethod
    def clamp_end(cls, data: Any) -> Any:
        # end never precedes start; an inverted segment keeps its text
        if not isinstance(data, dict):
            return data
        try:
            start, end = float(data["start"]), float(data["end"])
        except (KeyError, TypeError, ValueError):
            return data
        if end < start:
            data = {**data, "end": start}
        return data


class TranscriptionResult(BaseModel):
    """Parsed verbose_json response for one audio file."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    text: str | None = None
    language: str | None = None
    duration: float | None = None
    segments: list[TranscriptionSegment] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def null_segments(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("segments") is None:
            data = {**data, "segments": []}
        return data

    @property
    def has_segments(self) -> bool:
        return bool(self.segments)
