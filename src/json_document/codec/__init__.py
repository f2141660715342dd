"""codec subpackage: text <-> Node conversion.

Import from this module (not from sub-modules directly) to stay on the
stable public interface.

Example::

    from json_document.codec import Parser, Writer

    doc = Parser().parse('{"a": [1, 2]}')
    text = Writer().dumps(doc)
"""

from __future__ import annotations

from json_document.codec.config import ParserConfig, WriterConfig, depth_limit
from json_document.codec.cursor import TextCursor
from json_document.codec.parser import Parser
from json_document.codec.writer import Writer

__all__ = [
    "Parser",
    "ParserConfig",
    "TextCursor",
    "Writer",
    "WriterConfig",
    "depth_limit",
]
