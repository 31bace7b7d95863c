"""
Installed package registry - rebuilt from disk on every call.

Resolution is first-match-wins: discovery directory order, then sorted
directory listing order. An exact name match beats a substring match.
"""

import logging
import os
from typing import Dict, List, Optional

from ..indexing.models import ModuleInfo
from .project import PACKAGE_JSON, discover_dependency_dirs, read_json

logger = logging.getLogger(__name__)

SCOPE_PREFIX = "@"
UNKNOWN_VERSION = "unknown"


def _list_dir(path: str) -> List[str]:
    try:
        return sorted(os.listdir(path))
    except OSError:
        logger.debug("Cannot list %s", path, exc_info=True)
        return []


def _read_module(module_dir: str, fallback_name: str) -> Optional[ModuleInfo]:
    manifest_path = os.path.join(module_dir, PACKAGE_JSON)
    if not os.path.exists(manifest_path):
        return None

    manifest = read_json(manifest_path)
    if not isinstance(manifest, dict):
        manifest = {}

    name = manifest.get("name")
    if not isinstance(name, str) or not name:
        name = fallback_name
    version = manifest.get("version")
    if not isinstance(version, str) or not version:
        version = UNKNOWN_VERSION

    return ModuleInfo(name=name, version=version, directory=os.path.abspath(module_dir))


def _scan_node_modules(node_modules_dir: str) -> List[ModuleInfo]:
    found: List[ModuleInfo] = []
    for entry in _list_dir(node_modules_dir):
        if entry.startswith("."):
            continue

        entry_path = os.path.join(node_modules_dir, entry)

        if entry.startswith(SCOPE_PREFIX):
            if not os.path.isdir(entry_path):
                continue
            for sub in _list_dir(entry_path):
                module = _read_module(os.path.join(entry_path, sub), f"{entry}/{sub}")
                if module:
                    found.append(module)
            continue

        module = _read_module(entry_path, entry)
        if module:
            found.append(module)
    return found


def scan_all_modules(root: str, name_filter: Optional[str] = None) -> List[ModuleInfo]:
    """
    Catalog every installed module across all discovered node_modules dirs.

    Args:
        root: Project root directory
        name_filter: Keep only modules whose name contains this substring

    Returns:
        Modules in registry order, one entry per name
    """
    modules: Dict[str, ModuleInfo] = {}
    for node_modules_dir in discover_dependency_dirs(root):
        for module in _scan_node_modules(node_modules_dir):
            # First occurrence wins
            if module.name not in modules:
                modules[module.name] = module

    result = list(modules.values())
    if name_filter:
        result = [m for m in result if name_filter in m.name]
    return result


def find_module(name: str, root: str) -> Optional[ModuleInfo]:
    """
    Resolve a module by exact name, falling back to the first substring match.

    Returns None when nothing matches; callers report "Module not found".
    """
    all_modules = scan_all_modules(root)
    for module in all_modules:
        if module.name == name:
            return module
    for module in all_modules:
        if name in module.name:
            return module
    return None
