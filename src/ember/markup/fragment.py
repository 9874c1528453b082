"""MarkupFragment — deferred, repeatable rendering of generated markup.

A fragment wraps one render callback ``(sink) -> None`` produced by the
template code generator. Nothing is materialized until a destination is
known, and nesting fragments is function composition rather than string
concatenation.

Render Paths:
- ``render_to_text_sink(sink)``: hand the callback the text sink as-is
- ``render_to_byte_sink(sink)``: interpose a ``_SinkAdaptor`` that encodes
  text into the byte sink and remembers the real ``OSError`` when a write
  fails, since the ``FormatError`` the callback sees carries none
- ``to_string()``: render into a ``TextAccumulator``

Thread-Safety:
Fragments hold no mutable state. Concurrent renders are as safe as the
state captured by the callback. Adaptors are created per call and never
shared.

"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ember.config import get_config
from ember.exceptions import FormatError, MarkupInvariantError, MarkupIOError
from ember.sinks import ByteSink, TextAccumulator, TextSink, write_all

logger = logging.getLogger(__name__)

RenderCallback = Callable[[TextSink], None]


class _SinkAdaptor:
    """Text-sink face over a byte sink, keeping the first real I/O error.

    Lives for exactly one ``render_to_byte_sink`` call.
    """

    __slots__ = ("_encoding", "_inner", "error")

    def __init__(self, inner: ByteSink, encoding: str) -> None:
        self._inner = inner
        self._encoding = encoding
        self.error: OSError | None = None

    def write(self, text: str) -> None:
        try:
            write_all(self._inner, text.encode(self._encoding, "xmlcharrefreplace"))
        except OSError as exc:
            if self.error is None:
                self.error = exc
            raise FormatError() from None


class MarkupFragment:
    """A block of markup that has not been rendered yet.

    Built by generated template code via ``make_markup(callback)``. Render
    it as many times as needed; each render is independent.

    Example:
        >>> def body(sink):
        ...     sink.write("a")
        ...     sink.write(escape_text("<b>"))
        ...     sink.write("c")
        >>> MarkupFragment(body).to_string()
        'a&lt;b&gt;c'
    """

    __slots__ = ("_callback",)

    def __init__(self, callback: RenderCallback) -> None:
        if not callable(callback):
            raise TypeError(f"MarkupFragment needs a callable, got {type(callback).__name__}")
        self._callback = callback

    def __repr__(self) -> str:
        return f"MarkupFragment({self._callback!r})"

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, "_callback"):
            raise AttributeError("MarkupFragment is immutable")
        object.__setattr__(self, name, value)

    @property
    def callback(self) -> RenderCallback:
        """The render callback this fragment replays."""
        return self._callback

    def render_to_text_sink(self, sink: TextSink) -> None:
        """Render into a text sink.

        Raises:
            FormatError: If the sink (or the callback) signals failure
        """
        self._callback(sink)

    render_fmt = render_to_text_sink

    def render_to_byte_sink(self, sink: ByteSink) -> None:
        """Render into a byte sink, encoding with the configured encoding.

        Writes already made before a failure stay in the sink.

        Raises:
            OSError: The exact error raised by the byte sink
            MarkupIOError: If the callback failed without any byte write
                failing (no real cause to report)
        """
        adaptor = _SinkAdaptor(sink, get_config().encoding)
        try:
            self._callback(adaptor)
        except FormatError:
            error = adaptor.error
            if error is None:
                logger.debug("Render of %r failed with no captured I/O error", self)
                raise MarkupIOError() from None
            logger.debug("Render of %r failed; surfacing captured %r", self, error)
            # Hide the FormatError context; the sink's own __cause__ stays intact
            error.__suppress_context__ = True
            raise error

    render = render_to_byte_sink

    def to_string(self) -> str:
        """Render into memory and return the text.

        Raises:
            MarkupInvariantError: If rendering fails; an in-memory
                accumulator never rejects writes, so this is a bug
        """
        acc = TextAccumulator()
        try:
            self._callback(acc)
        except FormatError as exc:
            raise MarkupInvariantError(
                f"Rendering {self!r} into memory failed"
            ) from exc
        return acc.getvalue()

    def __str__(self) -> str:
        return self.to_string()

    def __html__(self) -> str:
        """Rendered markup; already safe, so escaped writes pass it through."""
        return self.to_string()


def make_markup(callback: RenderCallback) -> MarkupFragment:
    """Construct a MarkupFragment from a render callback."""
    return MarkupFragment(callback)
