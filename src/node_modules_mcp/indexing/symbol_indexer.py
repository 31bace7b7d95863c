"""
Package symbol indexer.

Walks a package directory, parses every TypeScript declaration/source file
with tree-sitter and flattens the declarations into one ordered tuple.
"""

import logging
import os
import time
from typing import Dict, List, Optional, Tuple

from ..config import get_config
from ..utils import FileFilter, FileWalker, typescript_filter
from .languages import detect_language
from .models import ModuleInfo, SymbolRecord
from .strategies import TypeScriptParsingStrategy

logger = logging.getLogger(__name__)


class SymbolIndexer:
    """Syntactic declaration indexer for one package at a time."""

    def __init__(self, max_files: Optional[int] = None, file_filter: Optional[FileFilter] = None):
        """
        Args:
            max_files: Ceiling on files parsed per package, config default when None
            file_filter: Which files are indexed, TypeScript sources by default
        """
        self.max_files = max_files if max_files is not None else get_config().max_index_files
        self.walker = FileWalker(file_filter or typescript_filter())
        self._strategies: Dict[str, TypeScriptParsingStrategy] = {}

    def list_files(self, module: ModuleInfo) -> List[str]:
        """Relative paths that will be indexed, in indexing order."""
        return list(self.walker.walk_relative(module.directory, limit=self.max_files))

    def index(self, module: ModuleInfo) -> Tuple[SymbolRecord, ...]:
        """Index every selected file; a bad file never aborts the package."""
        start_time = time.time()
        files = self.list_files(module)
        symbols: List[SymbolRecord] = []
        skipped = 0

        for rel_path in files:
            language = detect_language(rel_path)
            if language is None:
                continue
            abs_path = os.path.join(module.directory, rel_path)
            try:
                with open(abs_path, 'rb') as f:
                    source = f.read()
                symbols.extend(self._get_strategy(language).parse_file(rel_path, source))
            except (OSError, ValueError) as e:
                skipped += 1
                logger.debug("Skipping %s in %s: %s", rel_path, module.name, e)

        logger.info(
            "Indexed %s@%s: %d symbols from %d files (%d skipped) in %.2fs",
            module.name, module.version, len(symbols), len(files), skipped,
            time.time() - start_time,
        )
        return tuple(symbols)

    def _get_strategy(self, language: str) -> TypeScriptParsingStrategy:
        strategy = self._strategies.get(language)
        if strategy is None:
            strategy = TypeScriptParsingStrategy(language)
            self._strategies[language] = strategy
        return strategy
