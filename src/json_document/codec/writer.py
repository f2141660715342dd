"""Writer: recursive serialization of a Node tree to pretty-printed text.

Layout rules:

- Scalars: ``true``/``false``, integer digits, ``repr`` of floats (locale
  independent; integral floats keep their ``.0`` so they read back as FLOAT),
  strings wrapped in double quotes.
- Arrays: ``[a, b, c]`` on one line.
- Objects: one member per line, indented one level deeper than the braces,
  members sorted by name, separated by ``,`` + newline. An object nested
  inside another value opens on its own line at its nesting depth. Empty
  objects are written as ``{}``.

By default strings are written verbatim, so embedded quotes or control
characters do not survive a round trip. ``WriterConfig(escape_strings=True)``
escapes them.

Nesting depth is passed down every recursive call; the writer keeps no state
between or during calls.
"""

from __future__ import annotations

import io
from collections.abc import Callable
from typing import TextIO

from json_document.codec.config import WriterConfig
from json_document.tree.nodes import Node, NodeKind

__all__ = ["Writer"]

_ESCAPE_TABLE: dict[int, str] = {c: f"\\u{c:04x}" for c in range(0x20)}
_ESCAPE_TABLE.update(
    {
        ord('"'): '\\"',
        ord("\\"): "\\\\",
        ord("\b"): "\\b",
        ord("\f"): "\\f",
        ord("\n"): "\\n",
        ord("\r"): "\\r",
        ord("\t"): "\\t",
    }
)


class Writer:
    """Serializes ``Node`` trees to text.

    Example::

        writer = Writer()
        print(writer.dumps(Node.from_python({"b": [1, 2], "a": True})))
        # {
        # 	"a": true,
        # 	"b": [1, 2]
        # }
    """

    def __init__(self, config: WriterConfig | None = None) -> None:
        self._config: WriterConfig = config if config is not None else WriterConfig()

    @property
    def config(self) -> WriterConfig:
        return self._config

    def dumps(self, node: Node) -> str:
        """Return the text of ``node`` (never with a trailing newline)."""
        buffer = io.StringIO()
        self._write_value(node, buffer.write, 0, nested=False)
        return buffer.getvalue()

    def write(self, node: Node, stream: TextIO) -> None:
        """Stream the text of ``node`` to ``stream``.

        Ends with a newline when ``config.trailing_newline`` is set.
        """
        self._write_value(node, stream.write, 0, nested=False)
        if self._config.trailing_newline:
            stream.write("\n")

    # ------------------------------------------------------------------
    # Recursive serialization
    # ------------------------------------------------------------------

    def _write_value(
        self, node: Node, out: Callable[[str], object], depth: int, nested: bool
    ) -> None:
        kind = node.kind
        if kind is NodeKind.OBJECT:
            self._write_object(node, out, depth, nested)
        elif kind is NodeKind.ARRAY:
            self._write_array(node, out, depth)
        elif kind is NodeKind.STRING:
            out(self._quote(node.get_value(str)))
        else:
            out(node.scalar_text)

    def _write_array(
        self, node: Node, out: Callable[[str], object], depth: int
    ) -> None:
        out("[")
        for i, child in enumerate(node.elements()):
            if i:
                out(", ")
            self._write_value(child, out, depth, nested=True)
        out("]")

    def _write_object(
        self, node: Node, out: Callable[[str], object], depth: int, nested: bool
    ) -> None:
        if node.get_child_count() == 0:
            out("{}")
            return

        indent = self._config.indent
        if nested:
            out("\n" + indent * depth)
        out("{\n")

        member_indent = indent * (depth + 1)
        for i, (name, child) in enumerate(node.members()):
            if i:
                out(",\n")
            out(f"{member_indent}{self._quote(name)}:")
            if not _opens_own_line(child):
                out(" ")
            self._write_value(child, out, depth + 1, nested=True)

        out("\n" + indent * depth + "}")

    def _quote(self, text: str) -> str:
        if self._config.escape_strings:
            text = text.translate(_ESCAPE_TABLE)
        return f'"{text}"'


def _opens_own_line(node: Node) -> bool:
    return node.kind is NodeKind.OBJECT and node.get_child_count() > 0
