"""node_modules MCP server - installed package lookup and TypeScript symbol index."""

__version__ = "0.3.0"
