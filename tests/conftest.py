"""Pytest configuration and shared fixtures.

Fixtures build throwaway projects with hand-written node_modules trees.
"""

import json
import os
import sys
import tempfile
import pytest
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from node_modules_mcp.config import reset_config
from node_modules_mcp.core import reset_docs_cache, reset_index_cache


LEFT_PAD_DTS = """// Pads a string on the left.
// Returns the padded string.
export declare function leftPad(
  str: string,
  len: number,
  ch?: string
): string;
"""

NODE_TYPES_DTS = """declare namespace NodeJS {
  interface Process {
    pid: number;
  }
}
declare module "fs" {
  export function readFileSync(path: string): string;
}
"""


def write_package(node_modules_dir, dir_name, manifest=None, files=None):
    """Create <node_modules_dir>/<dir_name> with an optional package.json and files."""
    package_dir = Path(node_modules_dir) / dir_name
    package_dir.mkdir(parents=True, exist_ok=True)
    if manifest is not None:
        content = manifest if isinstance(manifest, str) else json.dumps(manifest)
        (package_dir / "package.json").write_text(content)
    for rel_path, content in (files or {}).items():
        target = package_dir / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    return package_dir


@pytest.fixture
def make_package():
    """Factory fixture wrapping write_package."""
    return write_package


@pytest.fixture(autouse=True)
def isolated_state(monkeypatch):
    """Fresh config, caches and docs cache dir for every test."""
    with tempfile.TemporaryDirectory() as docs_dir:
        monkeypatch.setenv("NODE_MODULES_MCP_DOCS_CACHE_DIR", docs_dir)
        reset_config()
        reset_index_cache()
        reset_docs_cache()
        yield docs_dir
        reset_config()
        reset_index_cache()
        reset_docs_cache()


@pytest.fixture
def empty_project():
    """Create an empty temporary directory for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(os.path.realpath(temp_dir))


@pytest.fixture
def sample_project():
    """A project with left-pad, @types/node and lodash installed at the root."""
    with tempfile.TemporaryDirectory() as temp_dir:
        root = Path(os.path.realpath(temp_dir))
        (root / "package.json").write_text(json.dumps({"name": "app", "version": "1.0.0"}))
        node_modules = root / "node_modules"

        write_package(node_modules, "left-pad",
                      {"name": "left-pad", "version": "1.3.0"},
                      {"index.d.ts": LEFT_PAD_DTS})
        write_package(node_modules, "@types/node",
                      {"name": "@types/node", "version": "20.11.0"},
                      {"index.d.ts": NODE_TYPES_DTS})
        write_package(node_modules, "lodash",
                      {"name": "lodash", "version": "4.17.21"},
                      {
                          "README.md": "# lodash\n",
                          "docs/api.md": "# API\n\n## chunk\nSplits an array into groups.\n",
                          "index.d.ts": "export declare function chunk<T>(array: T[], size?: number): T[][];\n",
                      })
        (node_modules / ".bin").mkdir()
        yield root


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their module name."""
    for item in items:
        if "test_mcp_tools" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
