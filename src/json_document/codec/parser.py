"""Parser: recursive-descent conversion of JSON text into a Node tree.

The parser dispatches on the first significant character of each value, so no
alternative is ever tried and abandoned: a construct is either consumed in
full or rejected with a ``JsonParseError`` carrying the character offset and a
reason. Dispatch table:

- ``"``            -> string
- ``t`` / ``f``    -> ``true`` / ``false``
- digit, ``+``, ``-`` -> number (INT, or FLOAT when a ``.`` or exponent follows)
- ``[``            -> array
- ``{``            -> object
- anything else    -> rejected (``null`` included, with a dedicated reason)

Whitespace is skipped before every value and around structural characters,
never inside strings. By default string content is copied verbatim between
the quotes with no escape decoding; ``ParserConfig(decode_escapes=True)``
enables standard backslash escapes.

Numbers are read as exact integers (all mantissa digits over a power-of-ten
divisor), then converted with a single division, so ``2.5`` parses to exactly
``2.5``. Mantissa length is capped by ``max_number_digits`` and the exponent
by ``max_exponent``, so every accepted INT can be written back out.
"""

from __future__ import annotations

from json_document.codec.config import ParserConfig
from json_document.codec.cursor import TextCursor
from json_document.errors import JsonParseError
from json_document.tree.nodes import Node

__all__ = ["Parser"]

_DIGITS = frozenset("0123456789")
_SIGNS = frozenset("+-")
_NUMBER_START = _DIGITS | _SIGNS
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

_SIMPLE_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


class Parser:
    """Converts JSON text into a ``Node`` tree.

    A Parser holds only its configuration; each ``parse`` call uses its own
    cursor, so one instance can be reused freely.

    Example::

        parser = Parser()
        doc = parser.parse('{"a": 1, "b": [true, 2.5, "x"]}')
        doc["b"][1].get_value(float)   # 2.5
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self._config: ParserConfig = config if config is not None else ParserConfig()

    @property
    def config(self) -> ParserConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self, text: str) -> Node:
        """Parse a complete document.

        Args:
            text: JSON text holding exactly one value, optionally surrounded
                by whitespace.

        Returns:
            The root Node of the parsed tree.

        Raises:
            JsonParseError: On any syntax error, unsupported literal, nesting
                beyond ``max_depth``, out-of-range number, or trailing data.
        """
        cursor = TextCursor(text)
        cursor.skip_whitespace()
        if cursor.eof():
            raise cursor.error("empty document")
        node = self._parse_value(cursor, 0)
        cursor.skip_whitespace()
        if not cursor.eof():
            raise cursor.error(f"trailing data after document: {cursor.peek()!r}")
        return node

    def parse_into(self, node: Node, text: str) -> None:
        """Parse ``text`` and replace ``node``'s content with the result.

        ``node`` is left unchanged when parsing fails.
        """
        node.move_from(self.parse(text))

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def _parse_value(self, cursor: TextCursor, depth: int) -> Node:
        cursor.skip_whitespace()
        ch = cursor.peek()
        if ch == '"':
            return Node.new_scalar(self._parse_string(cursor))
        if ch == "t" or ch == "f":
            return self._parse_bool(cursor)
        if ch in _NUMBER_START:
            return self._parse_number(cursor)
        if ch == "[":
            return self._parse_array(cursor, depth)
        if ch == "{":
            return self._parse_object(cursor, depth)
        if ch == "n" and cursor.text.startswith("null", cursor.pos):
            raise cursor.error("null literal is not supported")
        raise cursor.unexpected()

    def _parse_bool(self, cursor: TextCursor) -> Node:
        if cursor.match("true"):
            return Node.new_scalar(True)
        if cursor.match("false"):
            return Node.new_scalar(False)
        raise cursor.error("invalid literal, expected 'true' or 'false'")

    def _parse_number(self, cursor: TextCursor) -> Node:
        start = cursor.pos
        negative = False
        if cursor.peek() in _SIGNS:
            negative = cursor.take() == "-"

        int_digits = _read_digits(cursor)
        if not int_digits:
            raise cursor.error(f"expected digit, found {_found(cursor)}")

        is_float = False
        frac_digits = ""
        if cursor.peek() == ".":
            cursor.take()
            is_float = True
            frac_digits = _read_digits(cursor)
            if not frac_digits:
                raise cursor.error(
                    f"expected digit after decimal point, found {_found(cursor)}"
                )

        limit = self._config.max_number_digits
        if len(int_digits) + len(frac_digits) > limit:
            raise cursor.error(f"number has more than {limit} digits", start)
        numerator = int(int_digits + frac_digits)
        denominator = 10 ** len(frac_digits)

        if cursor.peek() in ("e", "E"):
            cursor.take()
            is_float = True
            exponent_start = cursor.pos
            exponent_negative = False
            if cursor.peek() in _SIGNS:
                exponent_negative = cursor.take() == "-"
            exponent = self._read_exponent(cursor, exponent_start)
            if exponent_negative:
                denominator *= 10**exponent
            else:
                numerator *= 10**exponent

        if not is_float:
            return Node.new_scalar(-numerator if negative else numerator)

        try:
            value = numerator / denominator
        except OverflowError:
            raise cursor.error("number out of range", start) from None
        return Node.new_scalar(-value if negative else value)

    def _read_exponent(self, cursor: TextCursor, exponent_start: int) -> int:
        digits = _read_digits(cursor)
        if not digits:
            raise cursor.error(f"malformed exponent, found {_found(cursor)}")
        limit = self._config.max_exponent
        significant = digits.lstrip("0")
        # Compare lengths first so an absurd digit run is never converted.
        if len(significant) > len(str(limit)) or int(significant or "0") > limit:
            raise cursor.error(f"exponent exceeds limit {limit}", exponent_start)
        return int(significant or "0")

    # ------------------------------------------------------------------
    # Strings
    # ------------------------------------------------------------------

    def _parse_string(self, cursor: TextCursor) -> str:
        start = cursor.pos
        cursor.expect('"')
        if self._config.decode_escapes:
            return self._parse_escaped_string(cursor, start)
        end = cursor.text.find('"', cursor.pos)
        if end < 0:
            raise cursor.error("unterminated string", start)
        value = cursor.text[cursor.pos : end]
        cursor.pos = end + 1
        return value

    def _parse_escaped_string(self, cursor: TextCursor, start: int) -> str:
        chunks: list[str] = []
        while True:
            if cursor.eof():
                raise cursor.error("unterminated string", start)
            ch = cursor.take()
            if ch == '"':
                return "".join(chunks)
            if ch != "\\":
                chunks.append(ch)
                continue
            escape_start = cursor.pos - 1
            if cursor.eof():
                raise cursor.error("unterminated string", start)
            esc = cursor.take()
            simple = _SIMPLE_ESCAPES.get(esc)
            if simple is not None:
                chunks.append(simple)
            elif esc == "u":
                chunks.append(_read_unicode_escape(cursor, escape_start))
            else:
                raise cursor.error(f"invalid escape sequence '\\{esc}'", escape_start)

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def _enter(self, cursor: TextCursor, depth: int) -> None:
        if depth >= self._config.max_depth:
            raise cursor.error(f"nesting deeper than {self._config.max_depth} levels")

    def _parse_array(self, cursor: TextCursor, depth: int) -> Node:
        self._enter(cursor, depth)
        cursor.expect("[")
        elements: list[Node] = []

        cursor.skip_whitespace()
        if cursor.peek() == "]":
            cursor.take()
            return Node.new_array(elements)

        while True:
            elements.append(self._parse_value(cursor, depth + 1))
            cursor.skip_whitespace()
            ch = cursor.peek()
            if ch == "]":
                cursor.take()
                return Node.new_array(elements)
            if ch != ",":
                raise cursor.error(
                    f"expected ',' or ']' in array, found {_found(cursor)}"
                )
            cursor.take()
            if self._closes_after_comma(cursor, "]"):
                return Node.new_array(elements)

    def _parse_object(self, cursor: TextCursor, depth: int) -> Node:
        self._enter(cursor, depth)
        cursor.expect("{")
        members: dict[str, Node] = {}

        cursor.skip_whitespace()
        if cursor.peek() == "}":
            cursor.take()
            return Node.new_object(members)

        while True:
            cursor.skip_whitespace()
            if cursor.peek() != '"':
                raise cursor.error(
                    f"expected member name string, found {_found(cursor)}"
                )
            name = self._parse_string(cursor)
            cursor.skip_whitespace()
            cursor.expect(":", "':' after member name")
            # Duplicate names: the last value wins.
            members[name] = self._parse_value(cursor, depth + 1)
            cursor.skip_whitespace()
            ch = cursor.peek()
            if ch == "}":
                cursor.take()
                return Node.new_object(members)
            if ch != ",":
                raise cursor.error(
                    f"expected ',' or '}}' in object, found {_found(cursor)}"
                )
            cursor.take()
            if self._closes_after_comma(cursor, "}"):
                return Node.new_object(members)

    def _closes_after_comma(self, cursor: TextCursor, closer: str) -> bool:
        """Consume ``closer`` right after a comma, if trailing commas are allowed."""
        cursor.skip_whitespace()
        if cursor.peek() != closer:
            return False
        if not self._config.allow_trailing_commas:
            raise cursor.error(f"trailing comma before {closer!r}")
        cursor.take()
        return True


def _found(cursor: TextCursor) -> str:
    ch = cursor.peek()
    return repr(ch) if ch else "end of input"


def _read_digits(cursor: TextCursor) -> str:
    """Consume a run of ASCII digits and return it."""
    start = cursor.pos
    while cursor.peek() in _DIGITS:
        cursor.pos += 1
    return cursor.text[start : cursor.pos]


def _read_hex4(cursor: TextCursor, escape_start: int) -> int:
    digits = cursor.text[cursor.pos : cursor.pos + 4]
    if len(digits) < 4 or not all(c in _HEX_DIGITS for c in digits):
        raise cursor.error("invalid \\u escape, expected four hex digits", escape_start)
    cursor.pos += 4
    return int(digits, 16)


def _read_unicode_escape(cursor: TextCursor, escape_start: int) -> str:
    code = _read_hex4(cursor, escape_start)
    if 0xDC00 <= code <= 0xDFFF:
        raise cursor.error("unpaired low surrogate in \\u escape", escape_start)
    if 0xD800 <= code <= 0xDBFF:
        if not cursor.match("\\u"):
            raise cursor.error("unpaired high surrogate in \\u escape", escape_start)
        low = _read_hex4(cursor, cursor.pos - 2)
        if not 0xDC00 <= low <= 0xDFFF:
            raise cursor.error("invalid low surrogate in \\u escape", cursor.pos - 6)
        code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
    return chr(code)
