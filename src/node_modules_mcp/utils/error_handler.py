"""
Decorator-based error handling for MCP entry points.

Linus principle: eliminate the repeated try/except pattern at every tool.
"""

import errno
import logging
from functools import wraps
from typing import Any, Callable, Dict, cast

logger = logging.getLogger(__name__)


def create_error_response(error: Exception, context: str = "") -> Dict[str, Any]:
    """Build a specific error response - say exactly what went wrong"""
    if isinstance(error, FileNotFoundError):
        return {"success": False, "error": f"File not found: {error.filename}"}
    elif isinstance(error, PermissionError):
        return {"success": False, "error": f"Permission denied: {error.filename}"}
    elif isinstance(error, OSError) and error.errno == errno.EACCES:
        return {"success": False, "error": f"Access denied: {error.filename}"}
    elif isinstance(error, UnicodeDecodeError):
        return {
            "success": False,
            "error": f"File encoding error: cannot decode {error.object[:40]!r}",
        }
    elif isinstance(error, ValueError):
        return {"success": False, "error": f"Invalid value: {str(error)}"}
    else:
        error_msg = f"{context}: {str(error)}" if context else str(error)
        return {"success": False, "error": error_msg}


def handle_mcp_errors(func: Callable) -> Callable:
    """
    Unified error handling decorator for MCP tools - standard response shape

    Successful dict results get a success flag; any exception becomes a
    structured failure instead of crossing the tool boundary.
    """

    @wraps(func)
    def wrapper(*args, **kwargs) -> Dict[str, Any]:
        try:
            result = func(*args, **kwargs)
            if isinstance(result, dict) and "success" not in result:
                result["success"] = True
            return cast(Dict[str, Any], result)
        except Exception as e:
            logger.debug("Tool %s failed", func.__name__, exc_info=True)
            response = create_error_response(e)
            response["function"] = func.__name__
            return response

    return wrapper
