"""Sink contracts for rendering markup.

Two kinds of destination exist:

- **ByteSink**: ``write(data) -> int | None``. Fails with ``OSError``,
  which carries the real cause. Files opened in binary mode, sockets'
  ``makefile("wb")``, ``io.BytesIO`` all qualify.
- **TextSink**: ``write(text) -> object``. Fails by raising
  ``FormatError``, which carries nothing. ``io.StringIO`` and
  ``TextAccumulator`` qualify.

Both are structural protocols; no base class is required.

"""

from __future__ import annotations

import errno
from collections.abc import Buffer
from typing import Protocol, runtime_checkable


@runtime_checkable
class ByteSink(Protocol):
    """Destination for encoded output."""

    def write(self, data: bytes, /) -> int | None: ...


@runtime_checkable
class TextSink(Protocol):
    """Destination for text output. Signals failure with FormatError."""

    def write(self, text: str, /) -> object: ...


def write_all(sink: ByteSink, data: Buffer) -> None:
    """Write every byte of ``data`` to ``sink``.

    Raw streams may accept fewer bytes than offered; keep writing the rest.
    A ``None`` return is taken as a complete write (buffered writers and
    most file-likes). A zero-byte write means the sink can take no more.

    Raises:
        OSError: From the sink, or if it stops accepting bytes
    """
    chunk = bytes(data)
    while chunk:
        n = sink.write(chunk)
        if n is None:
            return
        if n == 0:
            raise OSError(errno.EIO, "failed to write whole buffer")
        chunk = chunk[n:]


class TextAccumulator:
    """In-memory text sink (StringBuilder pattern).

    Collects writes in a list and joins once at the end, keeping total
    cost linear in output size.

    Example:
        >>> acc = TextAccumulator()
        >>> acc.write("<p>")
        >>> acc.write("hi")
        >>> acc.getvalue()
        '<p>hi'
    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def write(self, text: str) -> None:
        self._parts.append(text)

    def getvalue(self) -> str:
        return "".join(self._parts)

    def __len__(self) -> int:
        return sum(map(len, self._parts))
