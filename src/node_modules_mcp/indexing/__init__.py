"""
Symbol indexing for installed packages.
"""

from .models import ModuleInfo, SymbolKind, SymbolRecord
from .symbol_indexer import SymbolIndexer

__all__ = ['ModuleInfo', 'SymbolIndexer', 'SymbolKind', 'SymbolRecord']
