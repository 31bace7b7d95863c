"""
Utility modules for the node_modules MCP server.

This package contains shared utilities:
- error_handler: Decorator-based error handling for MCP entry points
- file utilities: File filtering and walking
"""

from .error_handler import create_error_response, handle_mcp_errors
from .file_filter import FileFilter, docs_filter, search_filter, typescript_filter
from .file_walker import FileWalker

__all__ = [
    'create_error_response',
    'handle_mcp_errors',
    'FileFilter',
    'FileWalker',
    'docs_filter',
    'search_filter',
    'typescript_filter',
]
