"""
Tree-sitter language and parser management.

Lazy initialization with caching: grammars are loaded once per process.
"""

from typing import Dict, Optional

import tree_sitter
import tree_sitter_typescript

TYPESCRIPT = "typescript"
TSX = "tsx"

_LANGUAGE_FACTORIES = {
    TYPESCRIPT: tree_sitter_typescript.language_typescript,
    TSX: tree_sitter_typescript.language_tsx,
}

# Global cached language objects
_CACHED_LANGUAGES: Dict[str, tree_sitter.Language] = {}


def get_language(language: str) -> tree_sitter.Language:
    """Get a tree-sitter Language - cached"""
    cached = _CACHED_LANGUAGES.get(language)
    if cached is None:
        factory = _LANGUAGE_FACTORIES.get(language)
        if factory is None:
            raise ValueError(f"Unsupported language: {language}")
        cached = tree_sitter.Language(factory())
        _CACHED_LANGUAGES[language] = cached
    return cached


def get_parser(language: str) -> tree_sitter.Parser:
    """Get a parser for the given grammar"""
    return tree_sitter.Parser(get_language(language))


def detect_language(file_path: str) -> Optional[str]:
    """Map a file name to the grammar that parses it."""
    lowered = file_path.lower()
    if lowered.endswith(".tsx"):
        return TSX
    if lowered.endswith((".ts", ".mts", ".cts")):
        return TYPESCRIPT
    return None
