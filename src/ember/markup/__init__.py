"""Ember markup package — deferred fragments and generator primitives."""

from ember.markup.fragment import MarkupFragment, RenderCallback, make_markup
from ember.markup.runtime import (
    RUNTIME_NAMESPACE,
    build_namespace,
    render_nested,
    write_escaped,
    write_raw,
)

__all__ = [
    "RUNTIME_NAMESPACE",
    "MarkupFragment",
    "RenderCallback",
    "build_namespace",
    "make_markup",
    "render_nested",
    "write_escaped",
    "write_raw",
]
