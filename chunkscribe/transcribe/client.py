"""
chunkscribe.transcribe.client - Whisper HTTP API client.

Posts one audio file per request as multipart/form-data and returns the
parsed verbose_json result. Requests are never retried.
"""

from __future__ import annotations

import json
import mimetypes
from pathlib import Path
from typing import Any

import requests
from pydantic import ValidationError

from chunkscribe.exceptions import ConfigError, TranscriptionError
from chunkscribe.logging import get_logger
from chunkscribe.transcribe.models import TranscriptionResult

logger = get_logger("transcribe")

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def guess_content_type(audio_path: Path) -> str:
    """Guess the MIME type of an audio file from its extension."""
    content_type, _ = mimetypes.guess_type(audio_path.name)
    return content_type or DEFAULT_CONTENT_TYPE


class WhisperClient:
    """Client for an OpenAI-compatible /audio/transcriptions endpoint."""

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.openai.com/v1/audio/transcriptions",
        model: str = "whisper-1",
        response_format: str = "verbose_json",
        language: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """
        Args:
            api_key: Bearer credential sent with every request
            api_url: Full URL of the transcription endpoint
            model: Model identifier form field
            response_format: Response format form field
            language: Optional ISO-639-1 language hint
            timeout: Request timeout in seconds; None waits indefinitely
            session: Pre-built session, mainly for tests
        """
        self.api_url = api_url
        self.model = model
        self.response_format = response_format
        self.language = language
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["Authorization"] = f"Bearer {api_key}"

    def _form_fields(self) -> dict[str, str]:
        fields = {
            "model": self.model,
            "response_format": self.response_format,
        }
        if self.language:
            fields["language"] = self.language
        return fields

    def transcribe(self, audio_path: Path) -> TranscriptionResult:
        """Transcribe one audio file.

        Args:
            audio_path: File to upload

        Returns:
            Parsed TranscriptionResult

        Raises:
            TranscriptionError: On a non-200 status, a transport failure,
                or a response body that is not a valid transcription
        """
        content_type = guess_content_type(audio_path)
        logger.debug(f"POST {self.api_url} file={audio_path.name} type={content_type}")

        try:
            with open(audio_path, "rb") as f:
                response = self.session.post(
                    self.api_url,
                    data=self._form_fields(),
                    files={"file": (audio_path.name, f, content_type)},
                    timeout=self.timeout,
                )
        except requests.exceptions.RequestException as e:
            logger.error(f"Request for {audio_path.name} failed: {e}")
            raise TranscriptionError(
                f"Request failed for {audio_path.name}: {e}", status_code=None, body=str(e)
            ) from e

        if response.status_code != 200:
            raise TranscriptionError(
                f"Failed to transcribe {audio_path.name}: HTTP {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        return parse_response(response.text, status_code=response.status_code)


def parse_response(body: str, status_code: int = 200) -> TranscriptionResult:
    """Parse a verbose_json body into a TranscriptionResult.

    Raises:
        TranscriptionError: If the body is not JSON or has the wrong shape
    """
    try:
        data: Any = json.loads(body)
    except json.JSONDecodeError as e:
        raise TranscriptionError(
            f"Response is not valid JSON: {e}", status_code=status_code, body=body
        ) from e

    if not isinstance(data, dict):
        raise TranscriptionError(
            "Response JSON is not an object", status_code=status_code, body=body
        )

    try:
        return TranscriptionResult.model_validate(data)
    except ValidationError as e:
        raise TranscriptionError(
            f"Unexpected response structure: {e}", status_code=status_code, body=body
        ) from e


def create_client_from_config(config: Any) -> WhisperClient:
    """Create a Whisper client from ChunkscribeConfig.

    Args:
        config: ChunkscribeConfig instance

    Returns:
        Configured WhisperClient

    Raises:
        ConfigError: If no API key is configured
    """
    if not config.api_key:
        raise ConfigError(
            "No API key configured. Set OPENAI_API_KEY or api_key in chunkscribe.yaml."
        )
    return WhisperClient(
        api_key=config.api_key,
        api_url=config.api_url,
        model=config.model,
        response_format=config.response_format,
        language=config.language,
        timeout=config.request_timeout,
    )
