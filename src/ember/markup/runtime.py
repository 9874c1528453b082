"""Runtime primitives called by generated template code.

The template code generator lives outside this package. Everything its
output needs is here:

- ``make_markup(callback)``: wrap a render callback in a MarkupFragment
- ``write_raw(sink, value)``: write trusted text as-is
- ``write_escaped(sink, value)``: write untrusted text, HTML-escaped
- ``render_nested(sink, fragment)``: splice another fragment in place

``RUNTIME_NAMESPACE`` binds the same primitives to short, stable names.
``build_namespace()`` copies it into a fresh globals dict for ``exec``.

None of these functions keep state; they are safe for concurrent use.

Example (what generated code looks like):
    >>> def _render(_sink):
    ...     _raw(_sink, "<p>")
    ...     _escaped(_sink, name)
    ...     _raw(_sink, "</p>")
    >>> page = _markup(_render)

"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any

from ember.markup.fragment import MarkupFragment, make_markup
from ember.sinks import TextSink
from ember.utils.escape import escape_text


def write_raw(sink: TextSink, value: Any) -> None:
    """Write ``value`` without escaping. ``None`` writes nothing."""
    if value is None:
        return
    sink.write(value if isinstance(value, str) else str(value))


def write_escaped(sink: TextSink, value: Any) -> None:
    """Write ``value`` HTML-escaped.

    - ``None`` writes nothing
    - MarkupFragment is rendered in place, unescaped
    - objects with ``__html__`` are trusted and written as returned
    - anything else goes through ``str()`` then escaping
    """
    if value is None:
        return
    if isinstance(value, MarkupFragment):
        value.render_to_text_sink(sink)
        return
    if hasattr(value, "__html__"):
        sink.write(value.__html__())
        return
    sink.write(escape_text(value if isinstance(value, str) else str(value)))


def render_nested(sink: TextSink, fragment: MarkupFragment) -> None:
    """Render ``fragment`` into the sink of an enclosing render."""
    fragment.render_to_text_sink(sink)


# Read-only after module load
RUNTIME_NAMESPACE: MappingProxyType[str, Any] = MappingProxyType(
    {
        "_markup": make_markup,
        "_raw": write_raw,
        "_escaped": write_escaped,
        "_nested": render_nested,
        "_escape": escape_text,
        "_Markup": MarkupFragment,
    }
)


def build_namespace(**extra: Any) -> dict[str, Any]:
    """Fresh globals dict for exec'ing generated module code.

    Example:
        >>> ns = build_namespace(name="World")
        >>> exec(compiled_module, ns)
        >>> ns["page"].to_string()
    """
    namespace = dict(RUNTIME_NAMESPACE)
    namespace.update(extra)
    return namespace
