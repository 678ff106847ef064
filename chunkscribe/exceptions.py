"""
chunkscribe.exceptions - Custom exception classes.

All Chunkscribe-specific exceptions inherit from ChunkscribeError.
"""


class ChunkscribeError(Exception):
    """Base exception for all Chunkscribe errors."""

    pass


class ConfigError(ChunkscribeError):
    """Configuration loading or validation error."""

    pass


class InputMissingError(ChunkscribeError):
    """Input audio file does not exist or is not a regular file."""

    pass


class SplitError(ChunkscribeError):
    """FFmpeg splitting or probing failed."""

    pass


class NoChunksError(SplitError):
    """Splitting succeeded but produced no chunk files."""

    pass


class TranscriptionError(ChunkscribeError):
    """Transcription request failed for a single file.

    status_code is None when the request never produced an HTTP response.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class DependencyError(ChunkscribeError):
    """Required dependency missing or misconfigured."""

    def __init__(self, dependency: str, message: str, install_hint: str | None = None):
        self.dependency = dependency
        self.message = message
        self.install_hint = install_hint
        super().__init__(f"{dependency}: {message}")
