"""
chunkscribe.cli - Typer CLI entry point.

    chunkscribe <input_audio_path> [output_text_path]

All console reporting and exit-code mapping happens here; the pipeline only
raises or returns a summary.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from chunkscribe import __version__
from chunkscribe.config import load_config
from chunkscribe.exceptions import (
    ConfigError,
    DependencyError,
    InputMissingError,
    SplitError,
)
from chunkscribe.logging import configure_logging
from chunkscribe.pipeline import transcribe_file

app = typer.Typer(
    name="chunkscribe",
    help="Transcribe an audio file with timestamps through the Whisper API.\n\n"
    "Files above the upload limit are split into fixed-length chunks with FFmpeg "
    "and stitched back into one transcript.",
    add_completion=False,
)
console = Console()

USAGE = "Usage: chunkscribe path_to_audio_file [output_text_file]"


def version_callback(value: bool) -> None:
    if value:
        console.print(f"chunkscribe {__version__}")
        raise typer.Exit()


@app.command()
def transcribe(
    input_file: str | None = typer.Argument(None, help="Audio file to transcribe"),
    output_file: str | None = typer.Argument(
        None, help="Transcript file to append to (default: transcription_with_timestamps.txt)"
    ),
    config_file: str | None = typer.Option(
        None, "--config", "-c", help="YAML config file (default: ./chunkscribe.yaml)"
    ),
    model: str | None = typer.Option(None, "--model", "-m", help="Transcription model"),
    language: str | None = typer.Option(
        None, "--language", "-l", help="Language code (auto-detect if not set)"
    ),
    keep_chunks: bool = typer.Option(
        False, "--keep-chunks", help="Do not delete chunk files after transcription"
    ),
    measure_durations: bool = typer.Option(
        False,
        "--measure-durations",
        help="Offset chunks by their probed duration instead of the nominal one",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Transcribe an audio file into a timestamped text transcript."""
    configure_logging(verbose)

    if not input_file:
        console.print(USAGE)
        raise typer.Exit(1)

    overrides = {
        "model": model,
        "language": language,
        "keep_chunks": True if keep_chunks else None,
        "measure_chunk_durations": True if measure_durations else None,
    }

    try:
        config = load_config(Path(config_file) if config_file else None, overrides)
    except (FileNotFoundError, ConfigError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    input_path = Path(input_file).expanduser()
    output_path = Path(output_file).expanduser() if output_file else config.default_output

    try:
        results = transcribe_file(
            input_path=input_path,
            output_path=output_path,
            config=config,
            console=console,
        )
    except (InputMissingError, SplitError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    except DependencyError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if e.install_hint:
            console.print(f"[dim]{e.install_hint}[/dim]")
        raise typer.Exit(1)
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(
        f"\n[green]✓[/green] Transcribed {results['transcribed']} of {results['chunks']} "
        f"chunk(s), empty {results['empty']}, failed {results['failed']}"
    )
    console.print(f"All transcriptions saved to {results['output']}")


if __name__ == "__main__":
    app()
