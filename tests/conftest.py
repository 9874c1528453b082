"""Pytest configuration and fixtures for Ember tests."""

from __future__ import annotations

import errno

import pytest

from ember import FormatError, MarkupFragment, write_escaped, write_raw


class RecordingByteSink:
    """Byte sink that keeps every write it accepts."""

    def __init__(self) -> None:
        self.writes: list[bytes] = []

    def write(self, data: bytes) -> int:
        self.writes.append(bytes(data))
        return len(data)

    def getvalue(self) -> bytes:
        return b"".join(self.writes)


class FailingByteSink(RecordingByteSink):
    """Byte sink that accepts ``budget`` writes, then raises ``error``."""

    def __init__(self, error: OSError, budget: int = 0) -> None:
        super().__init__()
        self.error = error
        self.budget = budget

    def write(self, data: bytes) -> int:
        if self.budget <= 0:
            raise self.error
        self.budget -= 1
        return super().write(data)


class TrickleByteSink(RecordingByteSink):
    """Raw-style byte sink accepting at most ``limit`` bytes per write."""

    def __init__(self, limit: int) -> None:
        super().__init__()
        self.limit = limit

    def write(self, data: bytes) -> int:
        return super().write(data[: self.limit])


class FailingTextSink:
    """Text sink that refuses every write."""

    def write(self, text: str) -> None:
        raise FormatError()


@pytest.fixture
def byte_sink() -> RecordingByteSink:
    """A byte sink that records writes."""
    return RecordingByteSink()


@pytest.fixture
def broken_pipe() -> OSError:
    """A specific OSError instance, for identity checks."""
    return BrokenPipeError(errno.EPIPE, "Broken pipe")


@pytest.fixture
def abc_fragment() -> MarkupFragment:
    """Fragment writing 'a', escaped '<b>', then 'c'."""

    def body(sink) -> None:
        write_raw(sink, "a")
        write_escaped(sink, "<b>")
        write_raw(sink, "c")

    return MarkupFragment(body)
