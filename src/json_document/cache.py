"""DocumentCache: LRU-backed cache of parsed document files.

Repeatedly loading the same configuration file re-reads and re-parses it
every time. ``DocumentCache`` keeps the parsed tree in memory and only goes
back to disk when the file's modification time or size has changed. LRU
eviction occurs silently when ``max_size`` is exceeded.

Callers always receive a deep copy, so editing a returned tree never changes
what the next ``get()`` returns.

Each ``DocumentCache`` instance maintains its own ``LRUCache``; there is no
class-level shared state.

Example::

    from json_document.cache import DocumentCache

    cache = DocumentCache(max_size=8)
    settings = cache.get("settings.json")     # read + parse
    again = cache.get("settings.json")        # served from memory
"""

from __future__ import annotations

import logging
import os

from cachetools import LRUCache

from json_document.api import StrPath, load
from json_document.codec.config import ParserConfig
from json_document.errors import DocumentLoadError
from json_document.tree.nodes import Node

__all__ = ["DocumentCache"]

logger = logging.getLogger(__name__)

# (st_mtime_ns, st_size) of the file when it was parsed.
_Stamp = tuple[int, int]


class DocumentCache:
    """LRU cache of parsed documents keyed by absolute file path.

    Args:
        max_size: Maximum number of documents to hold in memory. Defaults to
            32. When exceeded, the least-recently-used document is silently
            evicted.
        config: Parser settings used for every load. Defaults to
            ``ParserConfig()``.
    """

    def __init__(self, max_size: int = 32, config: ParserConfig | None = None) -> None:
        if max_size < 1:
            msg = f"max_size must be >= 1, got {max_size}"
            raise ValueError(msg)
        self._config = config
        self._cache: LRUCache[str, tuple[_Stamp, Node]] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of documents this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of documents stored in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, path: StrPath) -> Node:
        """Return a copy of the document at ``path``, parsing only when needed.

        The file is stat'ed on every call; a cached tree is reused only while
        both the modification time and the size are unchanged.

        Raises:
            DocumentLoadError: If the file cannot be stat'ed, opened or read.
            JsonParseError: If the file does not parse. Failures are not cached.
        """
        key = os.path.abspath(os.fspath(path))
        stamp = _stamp(key)

        entry = self._cache.get(key)
        if entry is not None and entry[0] == stamp:
            logger.debug("document cache hit: %s", key)
            return entry[1].copy()

        logger.debug("document cache miss: %s", key)
        node = load(key, config=self._config)
        self._cache[key] = (stamp, node)
        return node.copy()

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        return os.path.abspath(os.fspath(path)) in self._cache

    def invalidate(self, path: StrPath) -> None:
        """Drop the cached document for ``path``, if any."""
        key = os.path.abspath(os.fspath(path))
        if self._cache.pop(key, None) is not None:
            logger.debug("document cache invalidated: %s", key)

    def clear(self) -> None:
        """Drop every cached document."""
        self._cache.clear()


def _stamp(path: str) -> _Stamp:
    try:
        st = os.stat(path)
    except OSError as exc:
        raise DocumentLoadError(path, str(exc)) from exc
    return (st.st_mtime_ns, st.st_size)
