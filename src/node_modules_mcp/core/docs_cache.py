"""
Module documentation replication into a side cache.

Nested markdown files of each module are copied under the docs cache
directory so search and read_file can serve them without touching the
dependency tree again. Best effort: failures are logged and count as zero.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Dict, List, Optional

import xxhash

from ..config import get_config
from ..indexing import ModuleInfo
from ..utils import FileWalker, docs_filter
from .registry import scan_all_modules

logger = logging.getLogger(__name__)


def module_hash(module: ModuleInfo) -> str:
    """Stable directory key for a module version"""
    return xxhash.xxh3_64(f"{module.name}@{module.version}".encode("utf-8")).hexdigest()


class DocsCache:
    """Replicated markdown per module, memoized by module hash."""

    def __init__(self, cache_dir: Optional[str] = None):
        self.cache_dir = cache_dir or get_config().docs_cache_dir
        self._docs: Dict[str, List[str]] = {}
        self._walker = FileWalker(docs_filter())

    def module_dir(self, module: ModuleInfo) -> str:
        return os.path.join(self.cache_dir, module_hash(module))

    def get_docs(self, module: ModuleInfo) -> List[str]:
        """Replicated relative paths for module; empty when never replicated."""
        return list(self._docs.get(module_hash(module), []))

    def is_cached(self, module: ModuleInfo, rel_path: str) -> bool:
        return rel_path in self._docs.get(module_hash(module), [])

    def copy_module_docs(self, module: ModuleInfo) -> List[str]:
        """Copy nested *.md files of a module; root-level files are skipped."""
        key = module_hash(module)
        if key in self._docs:
            return list(self._docs[key])

        doc_files: List[str] = []
        seen = set()
        try:
            for rel_path in self._walker.walk_relative(module.directory):
                normalized = rel_path.lower()
                if normalized in seen:
                    continue
                seen.add(normalized)

                if "/" not in rel_path:
                    continue
                doc_files.append(rel_path)

            if doc_files:
                target_root = Path(self.module_dir(module))
                for rel_path in doc_files:
                    destination = target_root / rel_path
                    destination.parent.mkdir(parents=True, exist_ok=True)
                    shutil.copyfile(os.path.join(module.directory, rel_path), destination)
        except OSError as e:
            logger.error("Failed to copy docs for %s: %s", module.name, e)

        self._docs[key] = doc_files
        return list(doc_files)

    def initialize(self, root: str) -> Dict[str, int]:
        """Replicate docs for every module of the project."""
        os.makedirs(self.cache_dir, exist_ok=True)
        modules = scan_all_modules(root)
        cached = 0

        for module in modules:
            try:
                if self.copy_module_docs(module):
                    cached += 1
            except Exception as e:
                logger.error("Failed to cache docs for %s: %s", module.name, e)

        return {"total": len(modules), "cached": cached}

    def clear(self):
        self._docs.clear()


_global_docs_cache: Optional[DocsCache] = None


def get_docs_cache() -> DocsCache:
    global _global_docs_cache
    if _global_docs_cache is None:
        _global_docs_cache = DocsCache()
    return _global_docs_cache


def reset_docs_cache():
    global _global_docs_cache
    _global_docs_cache = None
