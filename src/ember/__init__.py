"""Ember — runtime support for compile-time HTML templates.

A template code generator turns template source into Python render
callbacks. Ember is what those callbacks run against: HTML escaping, and
a deferred MarkupFragment that renders into text or byte sinks on demand.

Quickstart:
    >>> from ember import escape, make_markup, write_escaped, write_raw
    >>> escape("<flim&flam>")
    '&lt;flim&amp;flam&gt;'
    >>> def body(sink):
    ...     write_raw(sink, "<p>")
    ...     write_escaped(sink, "Tom & Jerry")
    ...     write_raw(sink, "</p>")
    >>> page = make_markup(body)
    >>> page.to_string()
    '<p>Tom &amp; Jerry</p>'

Byte sinks:
    >>> with open("page.html", "wb") as f:
    ...     page.render_to_byte_sink(f)

Architecture:
Generated code → make_markup(callback) → MarkupFragment → render into sink

- **EscapingTransform**: pull-based ``io.RawIOBase`` producing escaped bytes
  through caller buffers of any size
- **MarkupFragment**: immutable wrapper around one render callback
- **_SinkAdaptor**: per-call bridge from the text-sink interface to a byte
  sink, recovering the real ``OSError`` behind a ``FormatError``

Thread-Safety:
Fragments hold no mutable state; render them from any thread. Transforms
and adaptors are single-owner objects. Configuration overrides are
ContextVar-scoped.

"""

from ember.config import RuntimeConfig, get_config, runtime_config
from ember.exceptions import (
    ConfigError,
    ErrorCode,
    EscapeError,
    FormatError,
    MarkupError,
    MarkupInvariantError,
    MarkupIOError,
)
from ember.markup import (
    RUNTIME_NAMESPACE,
    MarkupFragment,
    build_namespace,
    make_markup,
    render_nested,
    write_escaped,
    write_raw,
)
from ember.sinks import ByteSink, TextAccumulator, TextSink
from ember.utils.escape import (
    EscapingTransform,
    escape,
    escape_bytes,
    escape_stream,
    escape_text,
)

__version__ = "0.1.0"

__all__ = [
    "RUNTIME_NAMESPACE",
    "ByteSink",
    "ConfigError",
    "ErrorCode",
    "EscapeError",
    "EscapingTransform",
    "FormatError",
    "MarkupError",
    "MarkupFragment",
    "MarkupIOError",
    "MarkupInvariantError",
    "RuntimeConfig",
    "TextAccumulator",
    "TextSink",
    "__version__",
    "build_namespace",
    "escape",
    "escape_bytes",
    "escape_stream",
    "escape_text",
    "get_config",
    "make_markup",
    "render_nested",
    "runtime_config",
    "write_escaped",
    "write_raw",
]


# Free-threading declaration (PEP 703)
def __getattr__(name: str) -> object:
    """Module-level getattr for the free-threading declaration."""
    if name == "_Py_mod_gil":
        # 0 = Py_MOD_GIL_NOT_USED
        return 0
    raise AttributeError(f"module 'ember' has no attribute {name!r}")
