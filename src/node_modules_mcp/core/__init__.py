"""
Core module - package resolution, symbol index cache and source reading.
"""

from .docs_cache import DocsCache, get_docs_cache, reset_docs_cache
from .index_cache import IndexCache, canonical_key, get_index_cache, reset_index_cache
from .project import discover_dependency_dirs, find_project_root, resolve_root
from .registry import find_module, scan_all_modules
from .source_reader import read_range, read_symbol, symbol_window
from .tool_registry import execute_tool

__all__ = [
    "DocsCache",
    "IndexCache",
    "canonical_key",
    "discover_dependency_dirs",
    "execute_tool",
    "find_module",
    "find_project_root",
    "get_docs_cache",
    "get_index_cache",
    "read_range",
    "read_symbol",
    "reset_docs_cache",
    "reset_index_cache",
    "resolve_root",
    "scan_all_modules",
    "symbol_window",
]
