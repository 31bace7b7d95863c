"""
Parsing strategies for package indexing.
"""

from .typescript_strategy import DEFAULT_NAME, NodeShape, TypeScriptParsingStrategy, classify_node

__all__ = ['DEFAULT_NAME', 'NodeShape', 'TypeScriptParsingStrategy', 'classify_node']
