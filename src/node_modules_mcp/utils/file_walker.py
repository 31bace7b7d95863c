"""
Centralized file walking utilities for the node_modules MCP server.

This module provides unified file traversal capabilities that integrate with
the FileFilter system, eliminating duplicate walking logic across components.
"""

import os
from pathlib import Path
from typing import Iterator, Optional

from .file_filter import FileFilter


class FileWalker:
    """Deterministic file walking with integrated filtering."""

    def __init__(self, file_filter: FileFilter):
        """
        Initialize the file walker.

        Args:
            file_filter: FileFilter instance deciding what is visited
        """
        self.file_filter = file_filter

    def walk_files(self, root_path: str) -> Iterator[Path]:
        """
        Walk through all matching files below a directory.

        Directories and files are visited in sorted order so the same tree
        always yields the same sequence. Symlinked subdirectories are not
        followed.

        Args:
            root_path: Directory to walk

        Yields:
            Path objects for files that pass the filter
        """
        for root, dirs, files in os.walk(root_path):
            # Filter and sort in-place so os.walk descends deterministically
            dirs[:] = sorted(d for d in dirs if not self.file_filter.should_exclude_directory(d))

            for file in sorted(files):
                file_path = Path(root) / file
                if not self.file_filter.should_exclude_file(file_path):
                    yield file_path

    def walk_relative(self, root_path: str, limit: Optional[int] = None) -> Iterator[str]:
        """
        Walk matching files and yield POSIX paths relative to root_path.

        Args:
            root_path: Directory to walk
            limit: Stop after this many files when given

        Yields:
            Relative paths using forward slashes
        """
        count = 0
        for file_path in self.walk_files(root_path):
            if limit is not None and count >= limit:
                return
            count += 1
            yield Path(os.path.relpath(file_path, root_path)).as_posix()
