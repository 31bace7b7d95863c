"""
Project root detection and node_modules directory discovery.

Only one workspace level is discovered: members matching packages/*, apps/*
or * directly below the root. Deeper nested workspaces are not visited.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

NODE_MODULES = "node_modules"
PACKAGE_JSON = "package.json"
PNPM_WORKSPACE = "pnpm-workspace.yaml"

# Evidence that dependencies are (or will be) installed at a root
ROOT_MARKERS = (NODE_MODULES, PNPM_WORKSPACE, "yarn.lock")

# Member patterns, scanned in this order
WORKSPACE_MEMBER_PATTERNS = ("packages/*", "apps/*", "*")


def read_json(path: str) -> Optional[Any]:
    """Parse a JSON file, returning None when it is missing or malformed."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError):
        return None


def find_project_root(start: str) -> str:
    """
    Walk upward from start until a directory has a package.json plus
    installed-dependency evidence. Falls back to start.
    """
    current = os.path.abspath(start)
    while True:
        if os.path.exists(os.path.join(current, PACKAGE_JSON)) and any(
            os.path.exists(os.path.join(current, marker)) for marker in ROOT_MARKERS
        ):
            return current
        parent = os.path.dirname(current)
        if parent == current:
            return os.path.abspath(start)
        current = parent


def resolve_root(root: Optional[str]) -> str:
    """Explicit root wins; otherwise detect from the working directory."""
    if root:
        return os.path.abspath(root)
    return find_project_root(os.getcwd())


def is_workspace(root: str) -> bool:
    if os.path.exists(os.path.join(root, PNPM_WORKSPACE)):
        return True
    manifest = read_json(os.path.join(root, PACKAGE_JSON))
    return isinstance(manifest, dict) and bool(manifest.get("workspaces"))


def _workspace_node_modules(root: str) -> List[str]:
    base = Path(root)
    found: List[str] = []
    for pattern in WORKSPACE_MEMBER_PATTERNS:
        matches = sorted(base.glob(f"{pattern}/{NODE_MODULES}"))
        for match in matches:
            parts = match.relative_to(base).parts
            # Skip hidden members and node_modules nested inside node_modules
            if any(part.startswith(".") for part in parts):
                continue
            if NODE_MODULES in parts[:-1]:
                continue
            if match.is_dir():
                found.append(str(match))
    return found


def discover_dependency_dirs(root: str) -> List[str]:
    """
    Every existing node_modules directory of the project.

    The root's own node_modules always comes first, followed by workspace
    member directories in pattern order. The order is the registry's
    first-match-wins order.
    """
    root = os.path.abspath(root)
    candidates = [os.path.join(root, NODE_MODULES)]

    if is_workspace(root):
        candidates.extend(_workspace_node_modules(root))

    dirs: List[str] = []
    seen = set()
    for candidate in candidates:
        if candidate in seen:
            continue
        seen.add(candidate)
        if os.path.isdir(candidate):
            dirs.append(candidate)

    logger.debug("Discovered %d node_modules directories under %s", len(dirs), root)
    return dirs
