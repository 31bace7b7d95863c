"""
Model classes for the indexing system.
"""

from .module_info import ModuleInfo
from .symbol_info import SIGNATURE_MAX_LENGTH, SymbolKind, SymbolRecord

__all__ = ['ModuleInfo', 'SymbolKind', 'SymbolRecord', 'SIGNATURE_MAX_LENGTH']
