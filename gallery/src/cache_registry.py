"""
Central registry for the process-wide snapshot caches, keyed by tag.

The revalidation endpoint and the test suite invalidate caches through it.

Usage:
    register_cache("artworks", artwork_cache)
    invalidate_cache("artworks")
"""

from dataclasses import asdict
from typing import Any

from gallery.src.services.snapshot_cache import SnapshotCache

_caches: dict[str, SnapshotCache[Any]] = {}


def register_cache(tag: str, cache: SnapshotCache[Any]) -> SnapshotCache[Any]:
    """Register a cache under a tag. Re-registering a tag replaces the previous cache."""
    if not tag:
        raise ValueError("Cache tag must not be empty")
    _caches[tag] = cache
    return cache


def get_registered_tags() -> list[str]:
    return sorted(_caches)


def invalidate_cache(tag: str) -> None:
    """Invalidate one registered cache. Raises KeyError for an unknown tag."""
    _caches[tag].invalidate()


def clear_all_caches() -> int:
    """Invalidate all registered caches. Returns count of caches cleared."""
    for cache in _caches.values():
        cache.invalidate()
    return len(_caches)


def get_cache_info() -> dict[str, Any]:
    """Get cache statistics for all registered caches."""
    return {tag: asdict(cache.info()) for tag, cache in _caches.items()}
