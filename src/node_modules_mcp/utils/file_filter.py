"""
File filtering rules shared by the indexer, search and docs replication.
"""

from pathlib import Path
from typing import Iterable, Optional, Tuple

# Declaration files first so the tuple reads the way the indexer prioritises them
TYPESCRIPT_SUFFIXES: Tuple[str, ...] = (".d.ts", ".d.mts", ".d.cts", ".ts", ".mts", ".cts", ".tsx")
SEARCH_SUFFIXES: Tuple[str, ...] = (
    ".d.ts", ".ts", ".tsx", ".jsx", ".css", ".scss", ".sass", ".less",
)
DOC_SUFFIXES: Tuple[str, ...] = (".md",)

INDEX_EXCLUDED_DIRS = frozenset({"node_modules", "dist", "build", "test", "tests", "__tests__"})
SEARCH_EXCLUDED_DIRS = frozenset({"node_modules", "test", "tests", "examples", "coverage"})
DOCS_EXCLUDED_DIRS = frozenset({"node_modules", "test", "tests"})


class FileFilter:
    """Directory exclusion plus suffix matching."""

    def __init__(self, suffixes: Iterable[str], excluded_dirs: Optional[Iterable[str]] = None):
        self.suffixes = tuple(s.lower() for s in suffixes)
        self.excluded_dirs = frozenset(excluded_dirs or ())

    def should_exclude_directory(self, dir_name: str) -> bool:
        """Hidden directories and configured names are never descended into."""
        return dir_name.startswith(".") or dir_name in self.excluded_dirs

    def should_exclude_file(self, file_path: Path) -> bool:
        name = file_path.name
        if name.startswith("."):
            return True
        return not name.lower().endswith(self.suffixes)


def typescript_filter(excluded_dirs: Optional[Iterable[str]] = None) -> FileFilter:
    return FileFilter(TYPESCRIPT_SUFFIXES, INDEX_EXCLUDED_DIRS if excluded_dirs is None else excluded_dirs)


def search_filter() -> FileFilter:
    return FileFilter(SEARCH_SUFFIXES, SEARCH_EXCLUDED_DIRS)


def docs_filter() -> FileFilter:
    return FileFilter(DOC_SUFFIXES, DOCS_EXCLUDED_DIRS)
