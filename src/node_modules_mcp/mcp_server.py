"""node_modules MCP server - stdio transport, tools delegate to the registry."""
import logging
import os
import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Dict, Optional

from mcp.server.fastmcp import FastMCP

from . import __version__
from .config import get_config
from .core import execute_tool, find_project_root, get_docs_cache

logger = logging.getLogger(__name__)


@dataclass
class ServerContext:
    project_root: str
    docs_summary: Dict[str, int] = field(default_factory=dict)


@asynccontextmanager
async def server_lifespan(_server: FastMCP) -> AsyncIterator[ServerContext]:
    context = ServerContext(project_root=find_project_root(os.getcwd()))
    logger.info("node-modules-mcp v%s ready. CWD=%s", __version__, os.getcwd())

    config = get_config()
    if config.docs_cache_enabled:
        logger.info("Initializing documentation cache...")
        try:
            context.docs_summary = get_docs_cache().initialize(context.project_root)
            logger.info(
                "Documentation cache initialized: %d/%d modules cached in %s",
                context.docs_summary["cached"], context.docs_summary["total"],
                config.docs_cache_dir,
            )
        except OSError as e:
            logger.error("Documentation cache unavailable: %s", e)
    yield context


mcp = FastMCP("node-modules-docs", lifespan=server_lifespan)


@mcp.tool()
def list_modules(root: Optional[str] = None, filter: Optional[str] = None) -> Dict[str, Any]:
    """List all installed Node modules from all node_modules directories (including workspace packages)."""
    return execute_tool("list_modules", root=root, filter=filter)


@mcp.tool()
def search(
    module: str,
    pattern: str,
    root: Optional[str] = None,
    flags: Optional[str] = None,
    context: int = 5,
    limit: int = 20,
) -> Dict[str, Any]:
    """Search for a regex in a module's .d.ts/.ts/.tsx/.jsx/.css/.scss/.sass/.less/.md files with snippets."""
    return execute_tool(
        "search",
        module=module,
        pattern=pattern,
        root=root,
        flags=flags,
        context=context,
        limit=limit,
    )


@mcp.tool()
def read_file(
    module: str,
    file: str,
    root: Optional[str] = None,
    start_line: Optional[int] = None,
    count: Optional[int] = None,
) -> Dict[str, Any]:
    """Read a file from a module, optionally a window of count lines from start_line (1-based)."""
    return execute_tool(
        "read_file",
        module=module,
        file=file,
        root=root,
        start_line=start_line,
        count=count,
    )


@mcp.tool()
def list_symbols(
    module: str,
    root: Optional[str] = None,
    kind: Optional[str] = None,
    name: Optional[str] = None,
    limit: int = 100,
) -> Dict[str, Any]:
    """List TypeScript symbols (function, class, interface, type, enum, namespace, variable) from a module."""
    return execute_tool("list_symbols", module=module, root=root, kind=kind, name=name, limit=limit)


@mcp.tool()
def get_symbol(
    module: str,
    file: str,
    name: str,
    root: Optional[str] = None,
    padding: int = 10,
) -> Dict[str, Any]:
    """Get the full code for a specific symbol with padding lines around it."""
    return execute_tool("get_symbol", module=module, file=file, name=name, root=root, padding=padding)


def configure_logging() -> None:
    # stdout carries the MCP protocol
    logging.basicConfig(
        level=get_config().log_level,
        stream=sys.stderr,
        format="[mcp] %(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    configure_logging()
    try:
        mcp.run()
    except Exception:
        logger.exception("Error starting server")
        raise SystemExit(1)


if __name__ == '__main__':
    main()
