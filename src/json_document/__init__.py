"""json-document - in-memory JSON document model with its own parser and writer."""

from __future__ import annotations

from json_document.api import dumps, load, loads, save
from json_document.cache import DocumentCache
from json_document.codec.config import ParserConfig, WriterConfig
from json_document.codec.parser import Parser
from json_document.codec.writer import Writer
from json_document.errors import (
    DocumentLoadError,
    JsonDocumentError,
    JsonParseError,
    KindMismatchError,
)
from json_document.tree.nodes import Node, NodeKind

__version__: str = "0.1.0"
__all__: list[str] = [
    "DocumentCache",
    "DocumentLoadError",
    "JsonDocumentError",
    "JsonParseError",
    "KindMismatchError",
    "Node",
    "NodeKind",
    "Parser",
    "ParserConfig",
    "Writer",
    "WriterConfig",
    "dumps",
    "load",
    "loads",
    "save",
]
