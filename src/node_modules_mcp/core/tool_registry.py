"""
Tool Registry - tool name to implementation mapping

Single entry point, no if/else dispatch chains.
"""

from typing import Any, Callable, Dict


def _import_tools():
    """Deferred import avoids a cycle with mcp_tools"""
    from .mcp_tools import (
        tool_get_index_stats,
        tool_get_symbol,
        tool_list_modules,
        tool_list_symbols,
        tool_read_file,
        tool_search,
    )

    return {
        "list_modules": tool_list_modules,
        "search": tool_search,
        "read_file": tool_read_file,
        "list_symbols": tool_list_symbols,
        "get_symbol": tool_get_symbol,
        "get_index_stats": tool_get_index_stats,
    }


def get_tool_registry() -> Dict[str, Callable]:
    """Tool registry - lazily loaded"""
    return _import_tools()


def execute_tool(tool_name: str, **kwargs) -> Dict[str, Any]:
    """
    Unified tool executor

    Unknown tools and unexpected argument errors come back as failure dicts.
    """
    tools = get_tool_registry()
    tool_func = tools.get(tool_name)

    if not tool_func:
        return {"success": False, "error": f"Unknown tool: {tool_name}"}

    try:
        return tool_func(**kwargs)
    except Exception as e:
        return {"success": False, "error": f"Tool execution failed: {str(e)}"}
