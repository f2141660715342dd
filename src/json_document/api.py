"""Public API functions for json-document.

This module provides the four user-facing functions: load, save, loads and
dumps. Each call creates a fresh Parser or Writer, so no state is carried
between calls.
"""

from __future__ import annotations

import logging
import os

from json_document.codec.config import ParserConfig, WriterConfig
from json_document.codec.parser import Parser
from json_document.codec.writer import Writer
from json_document.errors import DocumentLoadError, JsonParseError
from json_document.tree.nodes import Node

__all__ = ["dumps", "load", "loads", "save"]

logger = logging.getLogger(__name__)

StrPath = str | os.PathLike[str]


def loads(text: str, config: ParserConfig | None = None) -> Node:
    """Parse JSON text into a new document tree.

    Args:
        text:   The document text.
        config: Parser settings. Defaults to ``ParserConfig()`` when None.

    Returns:
        The root Node.

    Raises:
        JsonParseError: If the text is not an accepted document.
    """
    return Parser(config).parse(text)


def dumps(node: Node, config: WriterConfig | None = None) -> str:
    """Return the pretty-printed text of ``node`` (no trailing newline)."""
    return Writer(config).dumps(node)


def load(path: StrPath, config: ParserConfig | None = None) -> Node:
    """Read the file at ``path`` and parse it as a single document.

    The whole file is read into memory before parsing, with no newline
    translation. A leading UTF-8 byte order mark is skipped. There is no
    partial result: either the full tree is returned or an exception is raised.

    Args:
        path:   File to read (UTF-8).
        config: Parser settings. Defaults to ``ParserConfig()`` when None.

    Returns:
        The root Node.

    Raises:
        DocumentLoadError: If the file cannot be opened or read.
        JsonParseError: If the content does not parse; ``source`` is set to
            ``path``.
    """
    name = os.fspath(path)
    try:
        with open(name, encoding="utf-8-sig", newline="") as fh:
            text = fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentLoadError(name, str(exc)) from exc

    logger.debug("loaded %d characters from %s", len(text), name)
    try:
        return Parser(config).parse(text)
    except JsonParseError as exc:
        raise exc.with_source(name) from None


def save(node: Node, path: StrPath, config: WriterConfig | None = None) -> bool:
    """Write ``node`` to ``path``, creating or truncating the file.

    The writer streams straight into the file and line endings are never
    translated for the platform. There is no atomic replace.

    Args:
        node:   Root of the tree to write.
        path:   Destination file (written as UTF-8).
        config: Writer settings. Defaults to ``WriterConfig()`` when None.

    Returns:
        True once the document is written; False when ``path`` cannot be
        opened for writing.
    """
    name = os.fspath(path)
    writer = Writer(config)
    try:
        fh = open(name, "w", encoding="utf-8", newline="")
    except OSError as exc:
        logger.warning("cannot open %s for writing: %s", name, exc)
        return False
    with fh:
        writer.write(node, fh)
    logger.debug("saved document to %s", name)
    return True
