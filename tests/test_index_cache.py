"""Index cache keyed by canonical package directory."""

import os

import pytest

from node_modules_mcp.core.index_cache import IndexCache, canonical_key, get_index_cache, reset_index_cache
from node_modules_mcp.indexing import ModuleInfo, SymbolKind, SymbolRecord


class CountingIndexer:
    """Stands in for SymbolIndexer and records every call."""

    def __init__(self):
        self.calls = []

    def index(self, module):
        self.calls.append(module.directory)
        return (SymbolRecord(SymbolKind.FUNCTION, "f", "index.d.ts", 1, 1, "function f();"),)


@pytest.fixture
def package_dir(empty_project):
    path = empty_project / "node_modules" / "pkg"
    path.mkdir(parents=True)
    return path


class TestIndexCache:
    def test_hit_returns_same_sequence(self, package_dir):
        indexer = CountingIndexer()
        cache = IndexCache(indexer)
        module = ModuleInfo("pkg", "1.0.0", str(package_dir))

        first = cache.get_or_build(module)
        second = cache.get_or_build(module)

        assert first is second
        assert len(indexer.calls) == 1
        stats = cache.get_cache_stats()
        assert stats["cache_hits"] == 1
        assert stats["cache_misses"] == 1
        assert stats["cached_packages"] == 1

    def test_symlinked_directory_shares_entry(self, package_dir, empty_project):
        link = empty_project / "linked-pkg"
        try:
            os.symlink(str(package_dir), str(link), target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("cannot create symlinks here")

        indexer = CountingIndexer()
        cache = IndexCache(indexer)
        direct = cache.get_or_build(ModuleInfo("pkg", "1.0.0", str(package_dir)))
        via_link = cache.get_or_build(ModuleInfo("pkg", "1.0.0", str(link)))

        assert direct is via_link
        assert len(indexer.calls) == 1
        assert canonical_key(str(link)) == canonical_key(str(package_dir))

    def test_explicit_indexer_overrides_default(self, package_dir):
        default = CountingIndexer()
        explicit = CountingIndexer()
        cache = IndexCache(default)

        cache.get_or_build(ModuleInfo("pkg", "1.0.0", str(package_dir)), indexer=explicit)

        assert default.calls == []
        assert len(explicit.calls) == 1

    def test_clear(self, package_dir):
        indexer = CountingIndexer()
        cache = IndexCache(indexer)
        module = ModuleInfo("pkg", "1.0.0", str(package_dir))
        cache.get_or_build(module)

        cache.clear()

        assert not cache.contains(module)
        cache.get_or_build(module)
        assert len(indexer.calls) == 2

    def test_global_instance_is_replaceable(self):
        first = get_index_cache()
        assert get_index_cache() is first
        reset_index_cache()
        assert get_index_cache() is not first
