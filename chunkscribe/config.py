"""
chunkscribe.config - YAML config loading and validation.

Handles loading chunkscribe.yaml, filling the API key from the environment,
applying command-line overrides, and validating all parameters.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from chunkscribe.exceptions import ConfigError

DEFAULT_CONFIG_NAME = "chunkscribe.yaml"
API_KEY_ENV_VAR = "OPENAI_API_KEY"

MAX_FILE_SIZE_BYTES = 25 * 1024 * 1024
CHUNK_DURATION_SECONDS = 600


class ChunkscribeConfig(BaseModel):
    """Resolved configuration for a transcription run."""

    api_key: str | None = None
    api_url: str = "https://api.openai.com/v1/audio/transcriptions"
    model: str = "whisper-1"
    response_format: str = "verbose_json"
    language: str | None = None
    request_timeout: float | None = Field(default=None, gt=0.0)

    max_file_size_bytes: int = Field(default=MAX_FILE_SIZE_BYTES, gt=0)
    chunk_duration_seconds: int = Field(default=CHUNK_DURATION_SECONDS, gt=0)
    chunk_prefix: str = "chunk_"
    chunk_extension: str | None = None
    chunk_dir: Path | None = None
    keep_chunks: bool = False
    measure_chunk_durations: bool = False

    default_output: Path = Path("transcription_with_timestamps.txt")

    @field_validator("chunk_prefix")
    @classmethod
    def validate_chunk_prefix(cls, v: str) -> str:
        if not v or "/" in v or "\\" in v:
            raise ValueError("chunk_prefix must be a non-empty file name prefix")
        return v

    @field_validator("chunk_extension")
    @classmethod
    def validate_chunk_extension(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.lstrip(".")
        if not v:
            raise ValueError("chunk_extension must not be empty")
        return v

    @field_validator("response_format")
    @classmethod
    def validate_response_format(cls, v: str) -> str:
        if v != "verbose_json":
            raise ValueError("response_format must be verbose_json (segments are required)")
        return v


def merge_config(file_config: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Merge file config with overrides. Overrides take precedence unless None."""
    merged = file_config.copy()
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged


def find_config_file(start: Path | None = None) -> Path | None:
    """Return chunkscribe.yaml in the given (or current) directory, if present."""
    candidate = (start or Path.cwd()) / DEFAULT_CONFIG_NAME
    return candidate if candidate.exists() else None


def load_config(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> ChunkscribeConfig:
    """Load and validate configuration.

    Args:
        config_path: Explicit YAML file; chunkscribe.yaml in the working
            directory is used when omitted and present
        overrides: Values (typically from CLI options) applied on top

    Returns:
        Validated ChunkscribeConfig

    Raises:
        FileNotFoundError: If an explicit config file does not exist
        ConfigError: If the file is malformed or a value is invalid
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        config_path = find_config_file()

    raw_config: dict[str, Any] = {}
    if config_path is not None:
        with open(config_path, encoding="utf-8") as f:
            try:
                raw_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        if not isinstance(raw_config, dict):
            raise ConfigError(f"{config_path} must contain a mapping")

    merged = merge_config(raw_config, overrides or {})
    if not merged.get("api_key"):
        merged["api_key"] = os.environ.get(API_KEY_ENV_VAR) or None

    try:
        return ChunkscribeConfig(**merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def write_config(config: dict[str, Any], path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)
