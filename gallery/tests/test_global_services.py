"""
Tests for building the process-wide caches on first access.
"""

import pytest

from gallery.src import cache_registry, global_services
from gallery.src.services.artwork_cache import ArtistCache, ArtworkCache


@pytest.fixture
def no_caches(monkeypatch, isolated_registry):
    monkeypatch.setattr(global_services, "artwork_cache_instance", None)
    monkeypatch.setattr(global_services, "artist_cache_instance", None)


@pytest.mark.unit
def test_accessors_build_caches_when_startup_skipped_them(no_caches, monkeypatch):
    monkeypatch.setattr("sys.argv", ["manage.py", "shell"])

    assert global_services.initialize_services() is None

    artworks = global_services.get_artwork_cache()
    artist = global_services.get_artist_cache()

    assert isinstance(artworks, ArtworkCache)
    assert isinstance(artist, ArtistCache)
    assert cache_registry.get_registered_tags() == ["artist", "artworks"]


@pytest.mark.unit
def test_initialize_services_returns_the_built_caches(no_caches):
    artworks, artist = global_services.initialize_services(force=True)

    assert artworks is global_services.get_artwork_cache()
    assert artist is global_services.get_artist_cache()


@pytest.mark.unit
def test_missing_artist_cache_is_built_alongside_existing_artwork_cache(
    no_caches, monkeypatch
):
    existing = ArtworkCache(loader=lambda: (), ttl_seconds=60)
    monkeypatch.setattr(global_services, "artwork_cache_instance", existing)

    artist = global_services.get_artist_cache()

    assert isinstance(artist, ArtistCache)
    assert global_services.get_artwork_cache() is existing
