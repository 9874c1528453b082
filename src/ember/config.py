"""Ember runtime configuration.

Holds the few knobs the runtime has: the buffer size used when draining
the escaping transform, and the encoding used when rendering into byte
sinks. The active configuration lives in a ContextVar, so overrides made
with ``runtime_config()`` are scoped to the current thread or async task.

Environment variables (read once, on first ``get_config()``):
    EMBER_CHUNK_SIZE: Buffer size for escape() / escape_stream()
    EMBER_ENCODING: Encoding for MarkupFragment.render_to_byte_sink()

Example:
    >>> from ember.config import runtime_config
    >>> with runtime_config(encoding="latin-1"):
    ...     fragment.render_to_byte_sink(sock_file)

"""

from __future__ import annotations

import codecs
import logging
import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace

from ember.exceptions import ConfigError
from ember.utils.constants import DEFAULT_CHUNK_SIZE, HTML_ENTITIES

logger = logging.getLogger(__name__)

_RESERVED_TEXT = "".join(HTML_ENTITIES)


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Immutable runtime settings.

    Attributes:
        chunk_size: Output buffer size used when driving EscapingTransform
            to completion. Any positive size produces identical output.
        encoding: Codec used to turn rendered text into bytes for byte
            sinks. Must encode the reserved HTML characters as themselves.
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if isinstance(self.chunk_size, bool) or not isinstance(self.chunk_size, int):
            raise ConfigError("chunk_size", self.chunk_size, "must be an integer")
        if self.chunk_size < 1:
            raise ConfigError("chunk_size", self.chunk_size, "must be at least 1")

        try:
            codecs.lookup(self.encoding)
            encoded = _RESERVED_TEXT.encode(self.encoding)
        except LookupError:
            raise ConfigError("encoding", self.encoding, "unknown text codec") from None
        if encoded != _RESERVED_TEXT.encode("ascii"):
            raise ConfigError(
                "encoding",
                self.encoding,
                "must encode the reserved HTML characters as ASCII",
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RuntimeConfig:
        """Build a config from EMBER_* environment variables.

        Unset variables fall back to the dataclass defaults.
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}

        raw_chunk = env.get("EMBER_CHUNK_SIZE")
        if raw_chunk:
            try:
                kwargs["chunk_size"] = int(raw_chunk)
            except ValueError:
                raise ConfigError("chunk_size", raw_chunk, "must be an integer") from None

        raw_encoding = env.get("EMBER_ENCODING")
        if raw_encoding:
            kwargs["encoding"] = raw_encoding

        if kwargs:
            logger.debug("Runtime config overridden from environment: %s", kwargs)
        return cls(**kwargs)  # type: ignore[arg-type]


# Module-level ContextVar; None until first read
_runtime_config: ContextVar[RuntimeConfig | None] = ContextVar(
    "ember_runtime_config",
    default=None,
)

_env_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """Return the active RuntimeConfig.

    Falls back to the environment-derived config (computed once per
    process) when no ``runtime_config()`` block is active.
    """
    global _env_config

    config = _runtime_config.get()
    if config is not None:
        return config
    if _env_config is None:
        _env_config = RuntimeConfig.from_env()
    return _env_config


def set_config(config: RuntimeConfig) -> Token[RuntimeConfig | None]:
    """Set the active config and return the reset token.

    Low-level counterpart to ``runtime_config()`` for callers that cannot
    use a with block.
    """
    return _runtime_config.set(config)


def reset_config(token: Token[RuntimeConfig | None]) -> None:
    """Restore the config active before ``set_config()``."""
    _runtime_config.reset(token)


@contextmanager
def runtime_config(**overrides: object) -> Iterator[RuntimeConfig]:
    """Context manager overriding config fields for the with block.

    Unspecified fields keep their current values.

    Raises:
        ConfigError: If an override is invalid
        TypeError: If an override names an unknown field
    """
    config = replace(get_config(), **overrides)  # type: ignore[arg-type]
    token = _runtime_config.set(config)
    try:
        yield config
    finally:
        _runtime_config.reset(token)
