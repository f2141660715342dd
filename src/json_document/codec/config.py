"""ParserConfig and WriterConfig: immutable codec settings.

Both are frozen dataclasses validated at construction time, so an invalid
setting fails where it is written rather than in the middle of a parse.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass

__all__ = ["ParserConfig", "WriterConfig", "depth_limit"]

# Stack frames kept free for the caller when capping max_depth.
_RECURSION_HEADROOM = 200
# Parser and writer each use two frames per nesting level.
_FRAMES_PER_LEVEL = 2


def depth_limit() -> int:
    """Largest ``max_depth`` the recursive parser and writer can honour."""
    free_frames = sys.getrecursionlimit() - _RECURSION_HEADROOM
    return max(1, free_frames // _FRAMES_PER_LEVEL)


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Immutable configuration for the parser.

    Attributes:
        max_depth: Maximum array/object nesting depth, between 1 and
            ``depth_limit()`` (derived from the interpreter recursion limit).
            Deeper input is rejected with a ``JsonParseError``.
        max_exponent: Largest accepted exponent magnitude in ``1e<n>`` number
            forms (>= 0).
        max_number_digits: Largest accepted count of mantissa digits (integer
            plus fraction part) in one number. At most the interpreter's
            int-to-str digit limit, so every accepted INT can be written back.
        decode_escapes: When True, backslash escapes (including ``\\uXXXX``)
            inside strings are decoded. Default False: string content between
            the quotes is taken verbatim and a backslash has no meaning.
        allow_trailing_commas: When True, ``[1, 2,]`` and ``{"a": 1,}`` are
            accepted. Default True.
    """

    max_depth: int = 256
    max_exponent: int = 4096
    max_number_digits: int = 4300
    decode_escapes: bool = False
    allow_trailing_commas: bool = True

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            msg = f"max_depth must be >= 1, got {self.max_depth}"
            raise ValueError(msg)
        if self.max_depth > depth_limit():
            msg = f"max_depth must be <= {depth_limit()}, got {self.max_depth}"
            raise ValueError(msg)
        if self.max_exponent < 0:
            msg = f"max_exponent must be >= 0, got {self.max_exponent}"
            raise ValueError(msg)
        if self.max_number_digits < 1:
            msg = f"max_number_digits must be >= 1, got {self.max_number_digits}"
            raise ValueError(msg)
        int_digits = sys.get_int_max_str_digits()
        if int_digits and self.max_number_digits > int_digits:
            msg = (
                f"max_number_digits must be <= {int_digits}, "
                f"got {self.max_number_digits}"
            )
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class WriterConfig:
    """Immutable configuration for the writer.

    Attributes:
        indent: Indentation unit for one level of object nesting. Must be
            whitespace only. Default is a single tab.
        escape_strings: When True, quotes, backslashes and control characters
            in strings and member names are backslash-escaped. Default False:
            strings are written verbatim between quotes.
        trailing_newline: When True, ``Writer.write`` (and so ``save``) ends the
            output with a newline. ``Writer.dumps`` never adds one.
    """

    indent: str = "\t"
    escape_strings: bool = False
    trailing_newline: bool = True

    def __post_init__(self) -> None:
        if self.indent and not self.indent.isspace():
            msg = f"indent must contain only whitespace, got {self.indent!r}"
            raise ValueError(msg)
