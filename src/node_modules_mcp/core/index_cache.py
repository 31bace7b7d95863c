"""
Per-package symbol index cache.

Keyed by the package directory's canonical path so symlinked references to
one physical directory share an entry. Entries live for the whole process:
installed packages are treated as immutable during a session.
"""

import logging
import os
from typing import Any, Dict, Optional, Tuple

from ..indexing import ModuleInfo, SymbolIndexer, SymbolRecord

logger = logging.getLogger(__name__)


def canonical_key(directory: str) -> str:
    """Symlink-resolved absolute path of a package directory."""
    return os.path.realpath(directory)


class IndexCache:
    """Populate-on-miss symbol cache, never evicted."""

    def __init__(self, indexer: Optional[SymbolIndexer] = None):
        self._indexer = indexer
        self._entries: Dict[str, Tuple[SymbolRecord, ...]] = {}
        self._cache_hits = 0
        self._cache_misses = 0

    def get_or_build(self, module: ModuleInfo,
                     indexer: Optional[SymbolIndexer] = None) -> Tuple[SymbolRecord, ...]:
        """Cached symbols for module, indexing it on first request."""
        key = canonical_key(module.directory)
        cached = self._entries.get(key)
        if cached is not None:
            self._cache_hits += 1
            return cached

        self._cache_misses += 1
        builder = indexer or self._get_indexer()
        symbols = builder.index(module)
        self._entries[key] = symbols
        return symbols

    def contains(self, module: ModuleInfo) -> bool:
        return canonical_key(module.directory) in self._entries

    def _get_indexer(self) -> SymbolIndexer:
        if self._indexer is None:
            self._indexer = SymbolIndexer()
        return self._indexer

    def get_cache_stats(self) -> Dict[str, Any]:
        total_requests = self._cache_hits + self._cache_misses
        return {
            "cached_packages": len(self._entries),
            "cached_symbols": sum(len(symbols) for symbols in self._entries.values()),
            "cache_hits": self._cache_hits,
            "cache_misses": self._cache_misses,
            "hit_ratio": round(self._cache_hits / max(total_requests, 1), 3),
        }

    def clear(self):
        """Drop every entry - tests and resets only"""
        self._entries.clear()
        self._cache_hits = 0
        self._cache_misses = 0


# Process-wide instance, replaceable in tests
_global_index_cache: Optional[IndexCache] = None


def get_index_cache() -> IndexCache:
    global _global_index_cache
    if _global_index_cache is None:
        _global_index_cache = IndexCache()
    return _global_index_cache


def reset_index_cache():
    global _global_index_cache
    _global_index_cache = None
