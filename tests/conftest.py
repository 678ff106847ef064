"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any

import pytest

from chunkscribe.config import ChunkscribeConfig
from chunkscribe.exceptions import TranscriptionError
from chunkscribe.transcribe.models import TranscriptionResult

MIB = 1024 * 1024


class FakeRunner:
    """CommandRunner stand-in for ffmpeg and ffprobe.

    ffmpeg calls create `chunk_count` files from the output pattern;
    ffprobe calls report `durations[name]` (or fail when missing).
    """

    def __init__(
        self,
        chunk_count: int = 3,
        returncode: int = 0,
        stderr: str = "",
        durations: dict[str, float] | None = None,
    ) -> None:
        self.chunk_count = chunk_count
        self.returncode = returncode
        self.stderr = stderr
        self.durations = durations or {}
        self.commands: list[list[str]] = []

    def run(self, cmd: list[str]) -> subprocess.CompletedProcess:
        self.commands.append(cmd)
        if cmd[0] == "ffprobe":
            name = Path(cmd[-1]).name
            if name not in self.durations:
                return subprocess.CompletedProcess(cmd, 1, "", "probe failed")
            stdout = json.dumps({"format": {"duration": str(self.durations[name])}})
            return subprocess.CompletedProcess(cmd, 0, stdout, "")

        if self.returncode == 0:
            pattern = cmd[-1]
            for i in range(self.chunk_count):
                Path(pattern % i).write_bytes(b"chunk")
        return subprocess.CompletedProcess(cmd, self.returncode, "", self.stderr)


class FakeClient:
    """Transcription client returning queued results or raising queued errors."""

    def __init__(self, responses: list[Any]) -> None:
        self.responses = list(responses)
        self.calls: list[Path] = []

    def transcribe(self, audio_path: Path) -> TranscriptionResult:
        self.calls.append(audio_path)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, dict):
            return TranscriptionResult.model_validate(response)
        return response


def http_error(status_code: int = 500, body: str = '{"error": "server error"}'):
    return TranscriptionError(
        f"Failed to transcribe: HTTP {status_code}", status_code=status_code, body=body
    )


def make_audio(path: Path, size: int) -> Path:
    """Create a sparse file of the given size."""
    with open(path, "wb") as f:
        f.truncate(size)
    return path


@pytest.fixture
def config(tmp_path: Path) -> ChunkscribeConfig:
    """Config with a dummy key and a chunk directory inside tmp_path."""
    return ChunkscribeConfig(api_key="test-key", chunk_dir=tmp_path / "chunks")


@pytest.fixture
def small_audio(tmp_path: Path) -> Path:
    return make_audio(tmp_path / "interview.mp3", 10 * MIB)


@pytest.fixture
def large_audio(tmp_path: Path) -> Path:
    return make_audio(tmp_path / "lecture.mp3", 30 * MIB)


@pytest.fixture
def output_path(tmp_path: Path) -> Path:
    return tmp_path / "out" / "transcript.txt"


@pytest.fixture
def sample_response() -> dict:
    """Return a sample verbose_json response."""
    return {
        "task": "transcribe",
        "language": "english",
        "duration": 12.5,
        "text": "Hello there. How are you today?",
        "segments": [
            {
                "id": 0,
                "seek": 0,
                "start": 0.0,
                "end": 4.2,
                "text": " Hello there.",
                "tokens": [50364, 2425],
                "avg_logprob": -0.21,
            },
            {
                "id": 1,
                "seek": 0,
                "start": 4.2,
                "end": 12.5,
                "text": " How are you today? ",
                "tokens": [50574, 1012],
                "avg_logprob": -0.18,
            },
        ],
    }
