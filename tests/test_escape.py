"""Tests for the one-shot escaping helpers and escape_stream()."""

from __future__ import annotations

import io

import pytest

from ember import EscapeError, escape, escape_bytes, escape_stream, escape_text, runtime_config

from ember.utils.escape import EscapingTransform

from .conftest import FailingByteSink, RecordingByteSink, TrickleByteSink


class TestEscape:
    """escape() over in-memory strings."""

    def test_flim_flam(self) -> None:
        assert escape("<flim&flam>") == "&lt;flim&amp;flam&gt;"

    def test_no_reserved_characters(self) -> None:
        assert escape("du\tcks-233.14\ngeese") == "du\tcks-233.14\ngeese"

    def test_empty(self) -> None:
        assert escape("") == ""

    def test_quotes(self) -> None:
        assert escape("\"it's\"") == "&quot;it&#39;s&quot;"

    def test_already_escaped_is_escaped_again(self) -> None:
        assert escape("&amp;") == "&amp;amp;"

    def test_multibyte_text(self) -> None:
        assert escape("日本<語>🔥") == "日本&lt;語&gt;🔥"

    @pytest.mark.parametrize("chunk_size", [1, 2, 5, 6, 7, 4096])
    def test_chunk_size_does_not_change_output(self, chunk_size: int) -> None:
        text = "<a href=\"x\">Tom & Jerry's</a>" * 3
        expected = escape(text)
        with runtime_config(chunk_size=chunk_size):
            assert escape(text) == expected

    def test_wraps_unexpected_io_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from ember.utils import escape as escape_module

        def boom(self, buffer):
            raise OSError("impossible")

        monkeypatch.setattr(escape_module.EscapingTransform, "readinto", boom)
        with pytest.raises(EscapeError) as excinfo:
            escape("x")
        assert isinstance(excinfo.value.__cause__, OSError)


class TestEscapeText:
    """escape_text() is the single-pass equivalent used by escaped writes."""

    @pytest.mark.parametrize(
        "text",
        ["", "plain", "<flim&flam>", "\"'\"'", "a & b < c > d", "é&ü"],
    )
    def test_matches_escape(self, text: str) -> None:
        assert escape_text(text) == escape(text)


class TestEscapeBytes:
    """escape_bytes() escapes without decoding."""

    def test_bytes(self) -> None:
        assert escape_bytes(b"<x>") == b"&lt;x&gt;"

    def test_invalid_utf8_passes_through(self) -> None:
        assert escape_bytes(b"\xff<\xfe") == b"\xff&lt;\xfe"

    def test_bytearray(self) -> None:
        assert escape_bytes(bytearray(b"'")) == b"&#39;"


class TestEscapeStream:
    """escape_stream() copies a source into a byte sink."""

    def test_copies_escaped_bytes(self) -> None:
        sink = RecordingByteSink()
        total = escape_stream(io.BytesIO(b"<p>hi</p>"), sink)
        assert sink.getvalue() == b"&lt;p&gt;hi&lt;/p&gt;"
        assert total == len(sink.getvalue())

    def test_chunked_writes(self) -> None:
        sink = RecordingByteSink()
        escape_stream(io.BytesIO(b"&" * 10), sink, chunk_size=4)
        assert all(len(w) <= 4 for w in sink.writes)
        assert sink.getvalue() == b"&amp;" * 10

    def test_partial_sink_writes_are_completed(self) -> None:
        sink = TrickleByteSink(limit=1)
        escape_stream(b"<ok>", sink, chunk_size=8)
        assert sink.getvalue() == b"&lt;ok&gt;"

    def test_sink_error_propagates(self, broken_pipe: OSError) -> None:
        sink = FailingByteSink(broken_pipe)
        with pytest.raises(BrokenPipeError) as excinfo:
            escape_stream(b"data", sink)
        assert excinfo.value is broken_pipe

    def test_source_left_open(self) -> None:
        source = io.BytesIO(b"x")
        escape_stream(source, RecordingByteSink())
        assert not source.closed

    def test_closes_its_transform(self, monkeypatch: pytest.MonkeyPatch) -> None:
        closed: list[EscapingTransform] = []
        original = EscapingTransform.close

        def recording_close(self: EscapingTransform) -> None:
            closed.append(self)
            original(self)

        monkeypatch.setattr(EscapingTransform, "close", recording_close)
        escape_stream(b"<x>", RecordingByteSink())
        assert closed
        assert all(t.closed for t in closed)

    def test_invalid_chunk_size(self) -> None:
        with pytest.raises(ValueError, match="at least 1"):
            escape_stream(b"x", RecordingByteSink(), chunk_size=0)

    def test_empty_source(self) -> None:
        sink = RecordingByteSink()
        assert escape_stream(b"", sink) == 0
        assert sink.writes == []
