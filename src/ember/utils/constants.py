"""Shared constants for Ember.

The entity table is the single source of truth for HTML escaping. Both the
byte-level EscapingTransform and the text-level escaped writes derive their
lookup tables from it.
"""

from __future__ import annotations

# Reserved character -> entity replacement
# Apostrophe uses the numeric form; &apos; is not an HTML4 entity.
HTML_ENTITIES: dict[str, str] = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}

# Byte-keyed view for the streaming transform (every reserved char is ASCII)
BYTE_ENTITIES: dict[int, bytes] = {
    ord(char): entity.encode("ascii") for char, entity in HTML_ENTITIES.items()
}

# str.translate() table for single-pass text escaping
TEXT_TRANSLATE_TABLE: dict[int, str] = {
    ord(char): entity for char, entity in HTML_ENTITIES.items()
}

# Longest replacement (&quot;). The overflow buffer must hold this many bytes.
MAX_ENTITY_LENGTH: int = max(len(entity) for entity in HTML_ENTITIES.values())

RESERVED_BYTES: bytes = bytes(BYTE_ENTITIES)

# Default buffer size used when driving the transform to completion
DEFAULT_CHUNK_SIZE: int = 8192
