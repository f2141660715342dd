"""TextCursor: a forward-only, bounds-checked position over parser input."""

from __future__ import annotations

from json_document.errors import JsonParseError

__all__ = ["TextCursor"]


class TextCursor:
    """Forward-only cursor over a string.

    Every advance is checked against the end of the text: reading past the
    end raises ``JsonParseError`` instead of returning garbage. ``peek``
    returns an empty string at the end so callers can test for it without a
    separate length check.
    """

    __slots__ = ("_text", "pos")

    def __init__(self, text: str) -> None:
        self._text = text
        self.pos = 0

    @property
    def text(self) -> str:
        return self._text

    def eof(self) -> bool:
        return self.pos >= len(self._text)

    def peek(self) -> str:
        if self.pos >= len(self._text):
            return ""
        return self._text[self.pos]

    def take(self) -> str:
        """Return the current character and advance past it."""
        if self.pos >= len(self._text):
            raise self.error("unexpected end of input")
        ch = self._text[self.pos]
        self.pos += 1
        return ch

    def expect(self, ch: str, what: str | None = None) -> None:
        """Consume ``ch`` or fail with a description of what was expected."""
        found = self.peek()
        if found != ch:
            raise self.error(f"expected {what or repr(ch)}, found {_describe(found)}")
        self.pos += 1

    def match(self, literal: str) -> bool:
        """Consume ``literal`` if the text continues with it exactly."""
        if self._text.startswith(literal, self.pos):
            self.pos += len(literal)
            return True
        return False

    def skip_whitespace(self) -> None:
        text = self._text
        end = len(text)
        pos = self.pos
        while pos < end and text[pos].isspace():
            pos += 1
        self.pos = pos

    def error(self, reason: str, offset: int | None = None) -> JsonParseError:
        """Build (not raise) a parse error at ``offset`` or the current position."""
        return JsonParseError(reason, self.pos if offset is None else offset)

    def unexpected(self) -> JsonParseError:
        return self.error(f"unexpected {_describe(self.peek())}")


def _describe(ch: str) -> str:
    return "end of input" if not ch else repr(ch)
