"""
chunkscribe.pipeline - Sequential transcription of one audio file.

Validates the input, splits it when it exceeds the upload limit, transcribes
each chunk in order, and appends offset-adjusted segments to the transcript.
Per-chunk transcription failures are recorded and skipped; input, split and
configuration failures raise and abort the run before anything is written.
"""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import Any

from rich.markup import escape

from chunkscribe.config import ChunkscribeConfig
from chunkscribe.exceptions import SplitError, TranscriptionError
from chunkscribe.io import remove_file
from chunkscribe.logging import get_logger
from chunkscribe.merge import merge_segments
from chunkscribe.split.ffmpeg import CommandRunner, probe_duration, split_audio
from chunkscribe.split.planner import (
    ChunkDescriptor,
    needs_splitting,
    plan_chunks,
    single_chunk,
)
from chunkscribe.transcribe.client import create_client_from_config
from chunkscribe.utils import format_size
from chunkscribe.validation import check_ffmpeg, validate_input_file

logger = get_logger("pipeline")


def transcribe_file(
    input_path: Path,
    output_path: Path,
    config: ChunkscribeConfig,
    client: Any = None,
    runner: CommandRunner | None = None,
    console=None,
) -> dict[str, Any]:
    """Transcribe an audio file into a timestamped transcript.

    Args:
        input_path: Audio file to transcribe
        output_path: Transcript file, appended to
        config: Resolved configuration
        client: Object with transcribe(path) -> TranscriptionResult;
            built from config when omitted
        runner: CommandRunner for ffmpeg/ffprobe; subprocess when omitted
        console: Optional rich console for output

    Returns:
        Dict with run summary

    Raises:
        InputMissingError: If the input file does not exist
        ConfigError: If no client is given and no API key is configured
        DependencyError: If splitting is needed and ffmpeg is missing
        SplitError: If ffmpeg fails
        NoChunksError: If ffmpeg produced no chunk files
    """
    info = validate_input_file(input_path)
    size = info["size_bytes"]
    if console:
        console.print(f"Input file size: {size} bytes ({format_size(size)})")

    if client is None:
        client = create_client_from_config(config)

    results: dict[str, Any] = {
        "input": str(input_path),
        "output": str(output_path),
        "split": False,
        "chunks": 0,
        "transcribed": 0,
        "empty": 0,
        "failed": 0,
        "lines_written": 0,
        "offsets": [],
        "errors": [],
        "empty_texts": [],
        "deleted": [],
    }

    if not needs_splitting(size, config.max_file_size_bytes):
        chunk = single_chunk(input_path, config.chunk_duration_seconds)
        results["chunks"] = 1
        _process_chunks([chunk], output_path, config, client, runner, results, console)
        return results

    results["split"] = True
    if console:
        console.print(
            f"File size exceeds the maximum limit of {config.max_file_size_bytes} bytes."
        )
    if runner is None:
        check_ffmpeg(require_ffprobe=config.measure_chunk_durations)

    created_dir = config.chunk_dir is None
    chunk_dir = (
        Path(tempfile.mkdtemp(prefix="chunkscribe-")) if created_dir else config.chunk_dir
    )
    chunks: list[ChunkDescriptor] = []

    try:
        if console:
            console.print(
                f"Splitting audio into {config.chunk_duration_seconds}-second chunks..."
            )
        paths = split_audio(
            input_path,
            chunk_dir,
            config.chunk_duration_seconds,
            prefix=config.chunk_prefix,
            extension=config.chunk_extension,
            runner=runner,
        )
        chunks = plan_chunks(paths, config.chunk_duration_seconds)
        results["chunks"] = len(chunks)
        _process_chunks(chunks, output_path, config, client, runner, results, console)
    finally:
        if not config.keep_chunks:
            results["deleted"] = _cleanup_chunks(chunks, console)
            if created_dir:
                shutil.rmtree(chunk_dir, ignore_errors=True)

    return results


def _process_chunks(
    chunks: list[ChunkDescriptor],
    output_path: Path,
    config: ChunkscribeConfig,
    client: Any,
    runner: CommandRunner | None,
    results: dict[str, Any],
    console=None,
) -> None:
    """Transcribe and merge chunks in order, advancing the time offset."""
    offset = 0.0

    for chunk in chunks:
        results["offsets"].append(offset)
        logger.debug(f"Chunk {chunk.index} ({chunk.path.name}) at offset {offset}")

        try:
            result = client.transcribe(chunk.path)
        except TranscriptionError as e:
            results["failed"] += 1
            results["errors"].append(
                {
                    "chunk": str(chunk.path),
                    "status_code": e.status_code,
                    "body": e.body,
                    "error": str(e),
                }
            )
            if console:
                if e.status_code is not None and e.status_code != 200:
                    console.print(
                        f"[red]Failed to transcribe audio {escape(chunk.path.name)}. "
                        f"HTTP Status Code: {e.status_code}[/red]"
                    )
                    console.print(f"Response Body: {e.body}", markup=False)
                else:
                    console.print(
                        f"[red]Failed to transcribe audio {escape(chunk.path.name)}: "
                        f"{escape(str(e))}[/red]"
                    )
        else:
            lines = merge_segments(result, offset, output_path)
            if lines:
                results["transcribed"] += 1
                results["lines_written"] += len(lines)
                if console:
                    console.print(f"[cyan]Transcription for {escape(chunk.path.name)}:[/cyan]")
                    for line in lines:
                        console.print(line, markup=False, highlight=False)
                    console.print(
                        f"[dim]Transcription with timestamps appended to "
                        f"{escape(str(output_path))}[/dim]"
                    )
            else:
                results["empty"] += 1
                results["empty_texts"].append({"chunk": str(chunk.path), "text": result.text})
                if console:
                    console.print(
                        "[yellow]No transcription segments found for "
                        f"{escape(chunk.path.name)}.[/yellow]"
                    )
                    if result.text:
                        console.print("Full Transcription:")
                        console.print(result.text, markup=False, highlight=False)

        offset += _chunk_advance(chunk, config, runner, console)


def _chunk_advance(
    chunk: ChunkDescriptor,
    config: ChunkscribeConfig,
    runner: CommandRunner | None,
    console=None,
) -> float:
    """Seconds to add to the offset after a chunk.

    Nominal duration by default. With measure_chunk_durations the chunk is
    probed, falling back to the nominal value if ffprobe fails.
    """
    if not (config.measure_chunk_durations and chunk.is_split):
        return float(chunk.nominal_duration_seconds)

    try:
        return probe_duration(chunk.path, runner)
    except SplitError as e:
        logger.warning(f"{e}; using nominal duration")
        if console:
            console.print(
                f"[yellow]Could not measure {escape(chunk.path.name)}, "
                f"using nominal {chunk.nominal_duration_seconds}s[/yellow]"
            )
        return float(chunk.nominal_duration_seconds)


def _cleanup_chunks(chunks: list[ChunkDescriptor], console=None) -> list[str]:
    """Delete split chunk files; files already gone are not an error."""
    deleted = []
    for chunk in chunks:
        if not chunk.is_split:
            continue
        if remove_file(chunk.path):
            deleted.append(str(chunk.path))
            if console:
                console.print(f"[dim]Deleted chunk file: {chunk.path}[/dim]")
    return deleted
