"""
Pytest configuration for gallery tests.
"""

import pytest
from unittest.mock import MagicMock

from gallery.src import cache_registry, global_services
from gallery.src.services.artwork_cache import ArtistCache, ArtworkCache


@pytest.fixture(autouse=True)
def disable_rate_limiting(settings):
    """Disable django-ratelimit for all tests to prevent test interference."""
    settings.RATELIMIT_ENABLE = False


@pytest.fixture(autouse=True)
def clear_caches():
    """Invalidate all registered caches before and after each test."""
    cache_registry.clear_all_caches()
    yield
    cache_registry.clear_all_caches()


@pytest.fixture
def isolated_registry(monkeypatch):
    """An empty cache registry for the duration of one test."""
    monkeypatch.setattr(cache_registry, "_caches", {})


@pytest.fixture
def artwork_source(monkeypatch, isolated_registry):
    """
    Replace the process artwork cache with one backed by a mock loader.
    Set ``return_value`` or ``side_effect`` on the returned mock.
    """
    source = MagicMock(return_value=())
    cache = ArtworkCache(loader=source, ttl_seconds=60)
    monkeypatch.setattr(global_services, "artwork_cache_instance", cache)
    cache_registry.register_cache("artworks", cache)
    return source


@pytest.fixture
def artist_source(monkeypatch, isolated_registry):
    source = MagicMock(return_value=None)
    cache = ArtistCache(loader=source, ttl_seconds=300)
    monkeypatch.setattr(global_services, "artist_cache_instance", cache)
    cache_registry.register_cache("artist", cache)
    return source


class FakeClock:
    """Monotonic clock that only moves when a test moves it."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
