"""HTML escaping — streaming transform and one-shot helpers.

EscapingTransform is a pull-based ``io.RawIOBase`` that turns a byte
source into HTML-escaped bytes. Memory use is bounded by the caller's
output buffer, not by the input, so the same code serves ad-hoc string
escaping and escaping through small fixed buffers (sockets, pipes).

Chunking is transparent: draining the transform with any sequence of
buffer sizes yields the same bytes as draining it in one call.

Overflow State:
An entity can be longer than the space left in the caller's buffer. The
unwritten tail is parked in a two-state overflow slot:

- ``Idle``: nothing pending
- ``PendingSuffix(data)``: 1..MAX_ENTITY_LENGTH bytes owed to the next read

The slot is only ever non-idle between two reads, never at end-of-stream.

Example:
    >>> escape("<flim&flam>")
    '&lt;flim&amp;flam&gt;'
    >>> t = EscapingTransform(b'"')
    >>> [t.read(1) for _ in range(7)]
    [b'&', b'q', b'u', b'o', b't', b';', b'']

"""

from __future__ import annotations

import errno
import io
from collections.abc import Buffer
from dataclasses import dataclass
from typing import Protocol

from ember.config import get_config
from ember.exceptions import EscapeError
from ember.sinks import ByteSink, write_all
from ember.utils.constants import BYTE_ENTITIES, MAX_ENTITY_LENGTH, TEXT_TRANSLATE_TABLE

# (reserved byte, entity) pairs; '&' comes first so entities are never re-escaped
_BYTE_REPLACEMENTS: tuple[tuple[bytes, bytes], ...] = tuple(
    (bytes((byte,)), entity) for byte, entity in BYTE_ENTITIES.items()
)


class ByteSource(Protocol):
    """Anything that hands out bytes via ``read(n)``."""

    def read(self, size: int = -1, /) -> bytes | None: ...


@dataclass(frozen=True, slots=True)
class Idle:
    """No entity tail is pending."""


@dataclass(frozen=True, slots=True)
class PendingSuffix:
    """Unwritten tail of the last expanded entity.

    Attributes:
        data: Bytes owed to the next read, 1..MAX_ENTITY_LENGTH long
    """

    data: bytes

    def __post_init__(self) -> None:
        if not 0 < len(self.data) <= MAX_ENTITY_LENGTH:
            raise ValueError(
                f"pending suffix must hold 1..{MAX_ENTITY_LENGTH} bytes, got {len(self.data)}"
            )


OverflowState = Idle | PendingSuffix

_IDLE = Idle()


def _expand(chunk: bytes) -> bytes:
    """Replace every reserved byte in ``chunk`` with its entity."""
    for byte, entity in _BYTE_REPLACEMENTS:
        if byte in chunk:
            chunk = chunk.replace(byte, entity)
    return chunk


class EscapingTransform(io.RawIOBase):
    """Readable stream yielding the HTML-escaped bytes of ``source``.

    Args:
        source: Object with ``read(n) -> bytes``, or a bytes-like value
        closefd: Close ``source`` when the transform is closed. Always
            true for bytes-like sources, which are wrapped internally.

    Thread-Safety:
        Not shareable. One transform belongs to one reader.
    """

    def __init__(self, source: ByteSource | Buffer, *, closefd: bool = False) -> None:
        super().__init__()
        self._closefd = False
        self._state: OverflowState = _IDLE
        if not hasattr(source, "read"):
            if not isinstance(source, Buffer):
                raise TypeError(
                    f"source must have read() or be bytes-like, got {type(source).__name__}"
                )
            source = io.BytesIO(memoryview(source).cast("B"))
            closefd = True
        self._source: ByteSource = source  # type: ignore[assignment]
        self._closefd = closefd

    def __repr__(self) -> str:
        return f"<EscapingTransform source={self._source!r} state={self._state!r}>"

    @property
    def state(self) -> OverflowState:
        """Current overflow state (``Idle`` or ``PendingSuffix``)."""
        return self._state

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: Buffer) -> int | None:  # type: ignore[override]
        """Fill ``buffer`` with escaped bytes and return how many were written.

        Returns 0 only at end-of-stream with nothing pending. Returns None
        when a non-blocking source has no data yet and nothing was written.

        Raises:
            OSError: Propagated unchanged from the source
        """
        if self.closed:
            raise ValueError("I/O operation on closed file.")

        out = memoryview(buffer).cast("B")
        capacity = len(out)
        if capacity == 0:
            return 0

        written = 0
        state = self._state
        if isinstance(state, PendingSuffix):
            head = state.data[:capacity]
            written = len(head)
            out[:written] = head
            tail = state.data[written:]
            self._state = PendingSuffix(tail) if tail else _IDLE
            if written == capacity:
                return written

        while written < capacity:
            remaining = capacity - written
            # n input bytes expand to at most n * MAX_ENTITY_LENGTH output bytes
            want = max(1, remaining // MAX_ENTITY_LENGTH)
            chunk = self._source.read(want)
            if chunk is None:
                return written or None
            if not chunk:
                break

            expanded = _expand(chunk)
            if len(expanded) <= remaining:
                out[written : written + len(expanded)] = expanded
                written += len(expanded)
                continue

            # Entity straddles the end of the buffer: park its tail
            out[written:capacity] = expanded[:remaining]
            self._state = PendingSuffix(expanded[remaining:])
            return capacity

        return written

    def close(self) -> None:
        if self.closed:
            return
        try:
            if self._closefd:
                self._source.close()  # type: ignore[attr-defined]
        finally:
            self._state = _IDLE
            super().close()


def _drain(transform: EscapingTransform, chunk_size: int) -> bytes:
    """Read ``transform`` to exhaustion through a fixed-size buffer."""
    buffer = bytearray(chunk_size)
    parts: list[bytes] = []
    while True:
        n = transform.readinto(buffer)
        if not n:
            break
        parts.append(bytes(buffer[:n]))
    return b"".join(parts)


def escape_bytes(data: Buffer) -> bytes:
    """Escape a bytes-like value in memory.

    Raises:
        EscapeError: If the in-memory transform fails (never expected)
    """
    with EscapingTransform(data) as transform:
        try:
            return _drain(transform, get_config().chunk_size)
        except OSError as exc:
            raise EscapeError("Escaping an in-memory buffer failed") from exc


def escape(text: str) -> str:
    """Escape HTML special characters in ``text``.

    Runs the UTF-8 encoding of ``text`` through EscapingTransform. Every
    reserved character is a single ASCII byte, so multi-byte sequences
    pass through untouched.

    Example:
        >>> escape("<flim&flam>")
        '&lt;flim&amp;flam&gt;'

    Raises:
        EscapeError: If the in-memory transform fails (never expected)
    """
    return escape_bytes(text.encode("utf-8")).decode("utf-8")


def escape_text(text: str) -> str:
    """Escape ``text`` in a single ``str.translate()`` pass.

    Same result as ``escape()``, without the byte round trip. Used by
    escaped writes inside render callbacks.
    """
    return text.translate(TEXT_TRANSLATE_TABLE)


def escape_stream(
    source: ByteSource | Buffer,
    sink: ByteSink,
    *,
    chunk_size: int | None = None,
) -> int:
    """Copy ``source`` to ``sink``, escaping on the way.

    Only ``chunk_size`` bytes of escaped output are held at a time.

    Args:
        source: Byte source (not closed by this function)
        sink: Byte sink receiving the escaped output
        chunk_size: Buffer size; defaults to the configured chunk size

    Returns:
        Number of escaped bytes written to ``sink``

    Raises:
        OSError: From the source or the sink, unchanged
        BlockingIOError: If a non-blocking source has no data ready
    """
    size = chunk_size if chunk_size is not None else get_config().chunk_size
    if size < 1:
        raise ValueError(f"chunk_size must be at least 1, got {size}")

    buffer = bytearray(size)
    view = memoryview(buffer)
    total = 0
    with EscapingTransform(source) as transform:
        while True:
            n = transform.readinto(buffer)
            if n is None:
                raise BlockingIOError(errno.EAGAIN, "source has no data ready")
            if n == 0:
                return total
            write_all(sink, view[:n])
            total += n
