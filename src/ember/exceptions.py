"""Exceptions for the Ember markup runtime.

Exception Hierarchy:
MarkupError (base)
├── FormatError             # Opaque text-sink failure (no payload)
├── MarkupIOError           # Byte render failed without a captured OSError
├── MarkupInvariantError    # In-memory render failed (broken invariant)
├── EscapeError             # In-memory escape failed (broken invariant)
└── ConfigError             # Invalid runtime configuration

Error Propagation:
Byte sinks and sources fail with plain ``OSError``, which passes through
unchanged. Text sinks fail with ``FormatError``, which carries nothing.
``MarkupFragment.render_to_byte_sink`` never lets a ``FormatError``
escape: it is swapped for the ``OSError`` recovered by the sink adaptor.

Example:
    ```
    E-FMT-001: Text sink reported a failure with no underlying I/O error
      Docs: https://ember.readthedocs.io/en/latest/errors/#e-fmt-001
    ```

"""

from __future__ import annotations

import errno
from enum import Enum

# ---------------------------------------------------------------------------
# Error codes
# ---------------------------------------------------------------------------

_EMBER_DOCS_BASE = "https://ember.readthedocs.io/en/latest/errors"


class ErrorCode(Enum):
    """Searchable error codes for Ember runtime errors.

    Format: E-{CATEGORY}-{NUMBER}
    Categories: FMT (rendering), ESC (escaping), CFG (configuration)

    Example:
        >>> ErrorCode.UNCAPTURED_FORMAT_ERROR.docs_url
        'https://ember.readthedocs.io/en/latest/errors/#e-fmt-001'
    """

    # Rendering errors (E-FMT-xxx)
    FORMAT_ERROR = "E-FMT-000"
    UNCAPTURED_FORMAT_ERROR = "E-FMT-001"
    BROKEN_ACCUMULATOR = "E-FMT-002"

    # Escaping errors (E-ESC-xxx)
    ESCAPE_FAILED = "E-ESC-001"

    # Configuration errors (E-CFG-xxx)
    INVALID_CONFIG = "E-CFG-001"

    @property
    def docs_url(self) -> str:
        """Documentation URL for this error code."""
        return f"{_EMBER_DOCS_BASE}/#{self.value.lower()}"

    @property
    def category(self) -> str:
        """Error category (e.g., 'render', 'escape', 'config')."""
        prefix = self.value.split("-")[1]
        return {
            "FMT": "render",
            "ESC": "escape",
            "CFG": "config",
        }.get(prefix, "unknown")


class MarkupError(Exception):
    """Base exception for all Ember runtime errors.

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a short, human-readable summary.

        Format::

            E-ESC-001: Escaping an in-memory string failed
              Docs: https://ember.readthedocs.io/en/latest/errors/#e-esc-001
        """
        parts: list[str] = []

        header = str(self) or type(self).__name__
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        parts.append(header)

        if self.code:
            parts.append(f"  Docs: {self.code.docs_url}")

        return "\n".join(parts)


class FormatError(MarkupError):
    """A text sink refused a write.

    Deliberately carries no cause or message. Callers that need to know
    *why* a write failed must render to a byte sink, where the real
    ``OSError`` is recovered.
    """

    code: ErrorCode | None = ErrorCode.FORMAT_ERROR

    def __init__(self) -> None:
        super().__init__()


class MarkupIOError(MarkupError, OSError):
    """A byte-sink render failed but no ``OSError`` was captured.

    Happens only when the render callback raises ``FormatError`` itself,
    rather than as a result of a failing byte write. Subclasses ``OSError``
    so callers of ``render_to_byte_sink`` only ever need to catch one kind.
    """

    code: ErrorCode | None = ErrorCode.UNCAPTURED_FORMAT_ERROR

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            errno.EIO,
            message or "Text sink reported a failure with no underlying I/O error",
        )

    def __str__(self) -> str:
        return str(self.strerror)


class MarkupInvariantError(MarkupError, RuntimeError):
    """Rendering into an in-memory accumulator failed.

    An in-memory text accumulator never rejects a write, so this signals
    a bug in the render callback, not a recoverable condition.
    """

    code: ErrorCode | None = ErrorCode.BROKEN_ACCUMULATOR


class EscapeError(MarkupError, RuntimeError):
    """Escaping an in-memory string raised an I/O error."""

    code: ErrorCode | None = ErrorCode.ESCAPE_FAILED


class ConfigError(MarkupError, ValueError):
    """Invalid runtime configuration value.

    Attributes:
        field: Name of the offending configuration field
        value: The rejected value
    """

    code: ErrorCode | None = ErrorCode.INVALID_CONFIG

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}={value!r}: {reason}")
