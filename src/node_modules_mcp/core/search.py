"""
Regex line search over a module's replicated docs and code files.
"""

import logging
import os
import re
from typing import Any, Dict, Iterable, List, Optional, Pattern, Tuple

from ..indexing import ModuleInfo
from ..utils import FileWalker, search_filter
from .docs_cache import DocsCache
from .source_reader import read_text, split_lines

logger = logging.getLogger(__name__)

# JavaScript-style flag letters accepted by the search tool
_FLAG_MAP = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "u": 0,
    "g": 0,
    "y": 0,
}


def compile_pattern(pattern: str, flags: Optional[str] = None) -> Pattern[str]:
    """Compile pattern with flag letters; raises re.error on bad input."""
    compiled_flags = 0
    for letter in flags or "":
        if letter not in _FLAG_MAP:
            raise re.error(f"Invalid flags supplied to RegExp constructor '{flags}'")
        compiled_flags |= _FLAG_MAP[letter]
    return re.compile(pattern, compiled_flags)


def _scan_file(abs_path: str, rel_path: str, regex: Pattern[str], context: int,
               results: List[Dict[str, Any]], limit: int) -> bool:
    """Append hits from one file; True once the limit is reached."""
    try:
        lines = split_lines(read_text(abs_path))
    except OSError as e:
        logger.debug("Cannot search %s: %s", abs_path, e)
        return False

    for i, line in enumerate(lines):
        match = regex.search(line)
        if not match:
            continue
        start = max(0, i - context)
        end = min(len(lines), i + 1 + context)
        results.append({
            "file": rel_path,
            "line": i + 1,
            "match": match.group(0),
            "snippet": "\n".join(lines[start:end]),
        })
        if len(results) >= limit:
            return True
    return False


def search_module(module: ModuleInfo, regex: Pattern[str], context: int = 5, limit: int = 20,
                  docs_cache: Optional[DocsCache] = None) -> List[Dict[str, Any]]:
    """
    Search replicated docs first, then code files, stopping at limit.

    Args:
        module: Resolved module
        regex: Compiled pattern, matched per line
        context: Lines of context either side of a hit
        limit: Maximum number of results

    Returns:
        Hits as {file, line, match, snippet}
    """
    sources: List[Tuple[str, Iterable[str]]] = []
    if docs_cache is not None:
        sources.append((docs_cache.module_dir(module), docs_cache.get_docs(module)))
    sources.append((module.directory, FileWalker(search_filter()).walk_relative(module.directory)))

    results: List[Dict[str, Any]] = []
    for base_dir, rel_paths in sources:
        for rel_path in rel_paths:
            abs_path = os.path.join(base_dir, rel_path)
            if not os.path.isfile(abs_path):
                continue
            if _scan_file(abs_path, rel_path, regex, context, results, limit):
                return results
    return results
