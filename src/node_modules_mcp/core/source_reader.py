"""
Line-ranged file reading.

Out-of-range requests never raise; they return whatever overlaps the file.
"""

import re
from typing import List, Optional, Tuple

from ..config import get_config
from ..indexing import SymbolRecord

_LINE_SPLIT = re.compile(r"\r?\n")


def read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        return f.read()


def split_lines(content: str) -> List[str]:
    return _LINE_SPLIT.split(content)


def read_range(path: str, start_line: Optional[int] = None, line_count: Optional[int] = None) -> str:
    """
    Literal text of a file or of a line window within it.

    Args:
        path: Absolute file path
        start_line: 1-based first line, 1 when only line_count is given
        line_count: Number of lines, configured default when only start_line is given

    Returns:
        Whole file when both are omitted, else lines [start, start+count) joined by newlines
    """
    content = read_text(path)
    if start_line is None and line_count is None:
        return content

    start = start_line if start_line is not None else 1
    count = line_count if line_count is not None else get_config().default_read_lines

    lines = split_lines(content)
    start_idx = max(0, start - 1)
    end_idx = min(len(lines), start_idx + max(0, count))
    return "\n".join(lines[start_idx:end_idx])


def symbol_window(symbol: SymbolRecord, padding: int) -> Tuple[int, int]:
    """(start_line, line_count) covering the symbol plus padding, clamped at line 1."""
    start = max(1, symbol.start_line - padding)
    end = symbol.end_line + padding
    return start, end - start + 1


def read_symbol(path: str, symbol: SymbolRecord, padding: int = 10) -> str:
    start, count = symbol_window(symbol, padding)
    return read_range(path, start, count)
