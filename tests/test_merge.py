"""Tests for chunkscribe.merge module."""

from __future__ import annotations

from pathlib import Path

from chunkscribe.merge import format_segment_line, merge_segments, render_segments
from chunkscribe.transcribe.models import TranscriptionResult, TranscriptionSegment


def _result(*segments: tuple[float, float, str], text: str | None = None) -> TranscriptionResult:
    return TranscriptionResult(
        text=text,
        segments=[TranscriptionSegment(start=s, end=e, text=t) for s, e, t in segments],
    )


class TestFormatSegmentLine:
    def test_single_file_segment(self) -> None:
        segment = TranscriptionSegment(start=1.5, end=3.2, text=" hello ")
        assert format_segment_line(segment, 0) == "[00:00:01 - 00:00:03] hello"

    def test_offset_applied(self) -> None:
        segment = TranscriptionSegment(start=5, end=10, text="second chunk")
        assert format_segment_line(segment, 600) == "[00:10:05 - 00:10:10] second chunk"

    def test_offset_crosses_hour(self) -> None:
        segment = TranscriptionSegment(start=30, end=45.7, text="later")
        assert format_segment_line(segment, 3600) == "[01:00:30 - 01:00:45] later"


class TestRenderSegments:
    def test_order_preserved(self) -> None:
        result = _result((10, 12, "b"), (0, 2, "a"))
        assert render_segments(result, 0) == ["[00:00:10 - 00:00:12] b", "[00:00:00 - 00:00:02] a"]

    def test_deterministic(self) -> None:
        result = _result((0, 2, "a"), (2, 4, "b"))
        assert render_segments(result, 1200) == render_segments(result, 1200)


class TestMergeSegments:
    def test_appends_lines_and_blank_separator(self, tmp_path: Path) -> None:
        output = tmp_path / "out.txt"
        result = _result((0, 2.5, " first "), (2.5, 4, "second"))

        lines = merge_segments(result, 0, output)

        assert lines == ["[00:00:00 - 00:00:02] first", "[00:00:02 - 00:00:04] second"]
        assert output.read_text(encoding="utf-8") == (
            "[00:00:00 - 00:00:02] first\n[00:00:02 - 00:00:04] second\n\n"
        )

    def test_consecutive_chunks_accumulate(self, tmp_path: Path) -> None:
        output = tmp_path / "out.txt"

        merge_segments(_result((0, 1, "one")), 0, output)
        merge_segments(_result((0, 1, "two")), 600, output)

        assert output.read_text(encoding="utf-8") == (
            "[00:00:00 - 00:00:01] one\n\n[00:10:00 - 00:10:01] two\n\n"
        )

    def test_existing_content_preserved(self, tmp_path: Path) -> None:
        output = tmp_path / "out.txt"
        output.write_text("earlier transcript\n", encoding="utf-8")

        merge_segments(_result((0, 1, "new")), 0, output)

        assert output.read_text(encoding="utf-8").startswith("earlier transcript\n")

    def test_no_segments_writes_nothing(self, tmp_path: Path) -> None:
        output = tmp_path / "out.txt"

        lines = merge_segments(_result(text="full text only"), 0, output)

        assert lines == []
        assert not output.exists()
