"""Exception hierarchy for json-document.

Every error the package raises on purpose derives from ``JsonDocumentError``.
The concrete classes also inherit the closest builtin (``ValueError``,
``TypeError``, ``OSError``) so callers that already catch those keep working.
"""

from __future__ import annotations

__all__ = [
    "DocumentLoadError",
    "JsonDocumentError",
    "JsonParseError",
    "KindMismatchError",
]


class JsonDocumentError(Exception):
    """Base class for all json-document errors."""


class JsonParseError(JsonDocumentError, ValueError):
    """Text could not be parsed into a document.

    Attributes:
        reason: Human-readable description of what was expected or found.
        offset: 0-based character offset into the parsed text.
        source: File path the text was read from, or None for in-memory text.
    """

    def __init__(self, reason: str, offset: int, source: str | None = None) -> None:
        self.reason = reason
        self.offset = offset
        self.source = source
        super().__init__(self._format())

    def _format(self) -> str:
        msg = f"{self.reason} at offset {self.offset}"
        if self.source is not None:
            msg = f"{self.source}: {msg}"
        return msg

    def with_source(self, source: str) -> JsonParseError:
        """Return a copy of this error attributed to ``source``."""
        return JsonParseError(self.reason, self.offset, source=source)


class KindMismatchError(JsonDocumentError, TypeError):
    """An operation required a node kind other than the node's current kind."""

    def __init__(self, expected: str, actual: str, operation: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"{operation} requires kind {expected}, got {actual}")


class DocumentLoadError(JsonDocumentError, OSError):
    """A document file could not be opened or read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot load {path}: {reason}")
