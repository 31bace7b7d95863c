"""Path resolution helpers for module-scoped file access."""

import os
import re
from pathlib import PurePosixPath

WINDOWS_ABSOLUTE_PATTERN = re.compile(r"^[a-zA-Z]:[\\/]")


class PathBlockedError(ValueError):
    """Raised when a requested file would resolve outside its module."""


def normalize_relative(candidate: str) -> str:
    """Forward-slash form of a module-relative path."""
    return candidate.replace("\\", "/")


def resolve_module_path(module_dir: str, candidate: str) -> str:
    """Absolute path of candidate inside module_dir; traversal is blocked."""
    normalized = normalize_relative(candidate)
    if not normalized:
        raise PathBlockedError("Path is empty")
    if normalized.startswith("/") or WINDOWS_ABSOLUTE_PATTERN.match(normalized):
        raise PathBlockedError(f"Absolute paths are not allowed: {candidate}")

    parts = [part for part in PurePosixPath(normalized).parts if part not in ("", ".")]
    if any(part == ".." for part in parts):
        raise PathBlockedError(f"Path escapes module directory: {candidate}")

    return os.path.join(module_dir, *parts)
