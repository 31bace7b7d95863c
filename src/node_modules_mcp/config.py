"""
Configuration Management for the node_modules MCP server

Following Linus's principle: "Good configuration is no configuration."
Provides sensible defaults with optional environment variable overrides.
"""

import os
import tempfile
from typing import Optional


class ServerConfig:
    """Indexing, reading and docs cache configuration"""

    # Default values - sized for real-world packages like @types/node and typescript
    DEFAULT_MAX_INDEX_FILES = 3000  # Ceiling on files parsed per package
    DEFAULT_READ_LINES = 500  # Lines returned when only a start line is given
    DEFAULT_MAX_READ_LINES = 2000  # Upper bound for read_file count
    DEFAULT_MAX_SEARCH_RESULTS = 100
    DEFAULT_MAX_SYMBOL_RESULTS = 500
    DEFAULT_DOCS_CACHE_DIRNAME = "mcp-node-modules-docs"
    DEFAULT_LOG_LEVEL = "INFO"

    def __init__(self):
        # Load from environment variables with fallback to defaults
        self.max_index_files = self._get_int_env(
            "NODE_MODULES_MCP_MAX_INDEX_FILES", self.DEFAULT_MAX_INDEX_FILES
        )
        self.default_read_lines = self._get_int_env(
            "NODE_MODULES_MCP_DEFAULT_READ_LINES", self.DEFAULT_READ_LINES
        )
        self.max_read_lines = self._get_int_env(
            "NODE_MODULES_MCP_MAX_READ_LINES", self.DEFAULT_MAX_READ_LINES
        )
        self.max_search_results = self._get_int_env(
            "NODE_MODULES_MCP_MAX_SEARCH_RESULTS", self.DEFAULT_MAX_SEARCH_RESULTS
        )
        self.max_symbol_results = self._get_int_env(
            "NODE_MODULES_MCP_MAX_SYMBOL_RESULTS", self.DEFAULT_MAX_SYMBOL_RESULTS
        )
        self.docs_cache_dir = os.environ.get("NODE_MODULES_MCP_DOCS_CACHE_DIR") or os.path.join(
            tempfile.gettempdir(), self.DEFAULT_DOCS_CACHE_DIRNAME
        )
        self.docs_cache_enabled = self._get_bool_env("NODE_MODULES_MCP_DOCS_CACHE_ENABLED", True)
        self.log_level = (
            os.environ.get("NODE_MODULES_MCP_LOG_LEVEL") or self.DEFAULT_LOG_LEVEL
        ).upper()

        # Validate configuration
        self._validate_config()

    def _get_int_env(self, key: str, default: int) -> int:
        """Get integer from environment variable with fallback"""
        try:
            value = os.environ.get(key)
            if value is not None:
                return int(value)
        except (ValueError, TypeError):
            pass
        return default

    def _get_bool_env(self, key: str, default: bool) -> bool:
        """Get boolean from environment variable with fallback"""
        value = os.environ.get(key)
        if value is None:
            return default
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        return default

    def _validate_config(self):
        """Validate configuration values"""
        if self.max_index_files <= 0:
            raise ValueError("max_index_files must be positive")
        if self.default_read_lines <= 0:
            raise ValueError("default_read_lines must be positive")
        if self.max_read_lines <= 0:
            raise ValueError("max_read_lines must be positive")
        if self.max_search_results <= 0:
            raise ValueError("max_search_results must be positive")
        if self.max_symbol_results <= 0:
            raise ValueError("max_symbol_results must be positive")
        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {self.log_level}")

        if self.default_read_lines > self.max_read_lines:
            raise ValueError(
                f"default_read_lines ({self.default_read_lines}) cannot exceed "
                f"max_read_lines ({self.max_read_lines})"
            )

    def __repr__(self) -> str:
        return (
            f"ServerConfig("
            f"max_index_files={self.max_index_files}, "
            f"default_read_lines={self.default_read_lines}, "
            f"max_read_lines={self.max_read_lines}, "
            f"max_search_results={self.max_search_results}, "
            f"max_symbol_results={self.max_symbol_results}, "
            f"docs_cache_dir={self.docs_cache_dir!r}, "
            f"docs_cache_enabled={self.docs_cache_enabled}, "
            f"log_level={self.log_level!r})"
        )


# Global configuration instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get global server configuration instance"""
    global _config
    if _config is None:
        _config = ServerConfig()
    return _config


def reset_config():
    """Reset configuration (mainly for testing)"""
    global _config
    _config = None


# Environment documentation
CONFIG_DOCS = """
node_modules MCP Server Environment Variables:

- NODE_MODULES_MCP_MAX_INDEX_FILES: Files parsed per package when indexing symbols (default: 3000)
- NODE_MODULES_MCP_DEFAULT_READ_LINES: Lines returned by read_file when only startLine is given (default: 500)
- NODE_MODULES_MCP_MAX_READ_LINES: Upper bound for read_file count (default: 2000)
- NODE_MODULES_MCP_MAX_SEARCH_RESULTS: Upper bound for search limit (default: 100)
- NODE_MODULES_MCP_MAX_SYMBOL_RESULTS: Upper bound for list_symbols limit (default: 500)
- NODE_MODULES_MCP_DOCS_CACHE_DIR: Where module markdown is replicated (default: <tmp>/mcp-node-modules-docs)
- NODE_MODULES_MCP_DOCS_CACHE_ENABLED: Replicate docs at startup (default: true)
- NODE_MODULES_MCP_LOG_LEVEL: Log level written to stderr (default: INFO)

Example usage:
    export NODE_MODULES_MCP_MAX_INDEX_FILES=5000
    export NODE_MODULES_MCP_LOG_LEVEL=DEBUG
"""
