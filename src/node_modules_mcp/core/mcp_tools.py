"""
MCP Tools - direct data operations behind every registered tool

Each tool resolves the project root, resolves the module through the
registry and answers with a plain dict. Not-found conditions are normal
results with success=False, never exceptions.
"""

import logging
import os
import re
from typing import Any, Dict, List, Optional, Tuple

from ..config import get_config
from ..indexing import ModuleInfo, SymbolKind, SymbolRecord
from ..utils import handle_mcp_errors
from .docs_cache import DocsCache, get_docs_cache
from .index_cache import IndexCache, get_index_cache
from .paths import normalize_relative, resolve_module_path
from .project import resolve_root
from .registry import find_module, scan_all_modules
from .search import compile_pattern, search_module
from .source_reader import read_range, read_symbol

logger = logging.getLogger(__name__)


def _module_not_found(name: str) -> Dict[str, Any]:
    return {"success": False, "error": f"Module not found: {name}"}


def _file_not_found(file: str) -> Dict[str, Any]:
    return {"success": False, "error": f"File not found: {file}"}


def _check_range(label: str, value: int, minimum: int, maximum: Optional[int] = None) -> None:
    if value < minimum or (maximum is not None and value > maximum):
        upper = f" and {maximum}" if maximum is not None else ""
        bound = f"between {minimum}{upper}" if upper else f">= {minimum}"
        raise ValueError(f"{label} must be {bound}, got {value}")


def resolve_and_index(module: str, root: Optional[str] = None,
                      cache: Optional[IndexCache] = None
                      ) -> Tuple[Optional[ModuleInfo], Tuple[SymbolRecord, ...]]:
    """Resolve a module name and return its cached symbol index; (None, ()) when unresolved."""
    project_root = resolve_root(root)
    found = find_module(module, project_root)
    if found is None:
        return None, ()
    return found, (cache or get_index_cache()).get_or_build(found)


# ----- Core tools -----


@handle_mcp_errors
def tool_list_modules(root: Optional[str] = None, filter: Optional[str] = None) -> Dict[str, Any]:
    """List installed modules from every node_modules directory."""
    project_root = resolve_root(root)
    modules = scan_all_modules(project_root, filter)
    return {
        "success": True,
        "root": project_root,
        "total": len(modules),
        "modules": [m.to_dict() for m in modules],
    }


@handle_mcp_errors
def tool_search(module: str, pattern: str, root: Optional[str] = None, flags: Optional[str] = None,
                context: int = 5, limit: int = 20,
                docs_cache: Optional[DocsCache] = None) -> Dict[str, Any]:
    """Regex search over a module's docs and code files."""
    _check_range("context", context, 0)
    _check_range("limit", limit, 1, get_config().max_search_results)

    found = find_module(module, resolve_root(root))
    if found is None:
        return _module_not_found(module)

    try:
        regex = compile_pattern(pattern, flags)
    except re.error as e:
        return {"success": False, "error": f"Invalid regex: {e}"}

    results = search_module(found, regex, context=context, limit=limit,
                            docs_cache=docs_cache or get_docs_cache())
    return {
        "success": True,
        "module": found.name,
        "total": len(results),
        "results": results,
    }


@handle_mcp_errors
def tool_read_file(module: str, file: str, root: Optional[str] = None,
                   start_line: Optional[int] = None, count: Optional[int] = None,
                   docs_cache: Optional[DocsCache] = None) -> Dict[str, Any]:
    """Read a module file, whole or as a line window."""
    if start_line is not None:
        _check_range("startLine", start_line, 1)
    if count is not None:
        _check_range("count", count, 1, get_config().max_read_lines)

    found = find_module(module, resolve_root(root))
    if found is None:
        return _module_not_found(module)

    abs_path = resolve_module_path(found.directory, file)

    # Replicated markdown is served from the docs cache when present
    docs = docs_cache or get_docs_cache()
    rel_path = normalize_relative(file)
    if rel_path.lower().endswith(".md") and docs.is_cached(found, rel_path):
        cached_path = resolve_module_path(docs.module_dir(found), rel_path)
        if os.path.isfile(cached_path):
            abs_path = cached_path

    if not os.path.isfile(abs_path):
        return _file_not_found(file)

    return {
        "success": True,
        "module": found.name,
        "file": rel_path,
        "content": read_range(abs_path, start_line, count),
    }


@handle_mcp_errors
def tool_list_symbols(module: str, root: Optional[str] = None, kind: Optional[str] = None,
                      name: Optional[str] = None, limit: int = 100,
                      cache: Optional[IndexCache] = None) -> Dict[str, Any]:
    """List indexed declarations, filtered by exact kind and name substring."""
    _check_range("limit", limit, 1, get_config().max_symbol_results)
    wanted_kind = SymbolKind(kind) if kind else None

    found, symbols = resolve_and_index(module, root, cache)
    if found is None:
        return _module_not_found(module)

    selected: List[Dict[str, Any]] = []
    for symbol in symbols:
        if wanted_kind is not None and symbol.kind is not wanted_kind:
            continue
        if name and name not in symbol.name:
            continue
        selected.append(symbol.to_dict())
        if len(selected) >= limit:
            break

    return {
        "success": True,
        "module": found.name,
        "total": len(selected),
        "symbols": selected,
    }


@handle_mcp_errors
def tool_get_symbol(module: str, file: str, name: str, root: Optional[str] = None,
                    padding: int = 10, cache: Optional[IndexCache] = None) -> Dict[str, Any]:
    """Source of one symbol, looked up by exact (file, name)."""
    _check_range("padding", padding, 0)

    found, symbols = resolve_and_index(module, root, cache)
    if found is None:
        return _module_not_found(module)

    rel_path = normalize_relative(file)
    symbol = next((s for s in symbols if s.file == rel_path and s.name == name), None)
    if symbol is None:
        return {"success": False, "error": f"Symbol not found: {name} in {file}"}

    abs_path = resolve_module_path(found.directory, rel_path)
    if not os.path.isfile(abs_path):
        return _file_not_found(file)

    return {
        "success": True,
        "module": found.name,
        "file": rel_path,
        "symbol": symbol.to_summary(),
        "code": read_symbol(abs_path, symbol, padding),
    }


@handle_mcp_errors
def tool_get_index_stats(cache: Optional[IndexCache] = None) -> Dict[str, Any]:
    """Index cache statistics."""
    return {"success": True, **(cache or get_index_cache()).get_cache_stats()}
