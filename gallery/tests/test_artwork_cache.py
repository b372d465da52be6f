"""
Unit tests for ArtworkCache: slug lookup and the counts reported after a refresh.
"""

import pytest
from unittest.mock import MagicMock

from gallery.src.exceptions import SourceUnavailableError
from gallery.src.services.artwork_cache import ArtistCache, ArtworkCache
from gallery.src.models import Artist
from gallery.tests.sample_data import WAY_DAO, make_artworks


@pytest.mark.unit
class TestArtworkCache:
    def test_get_all_returns_snapshot_tuple(self, clock):
        source = MagicMock(return_value=list(make_artworks(3)))
        cache = ArtworkCache(loader=source, ttl_seconds=60, clock=clock)

        artworks = cache.get_all()

        assert isinstance(artworks, tuple)
        assert [artwork.slug for artwork in artworks] == [
            "artwork-1",
            "artwork-2",
            "artwork-3",
        ]

    def test_get_by_slug_finds_every_artwork(self, clock):
        collection = make_artworks(5) + (WAY_DAO,)
        cache = ArtworkCache(loader=lambda: collection, ttl_seconds=60, clock=clock)

        for artwork in collection:
            found = cache.get_by_slug(artwork.slug)
            assert found is not None
            assert found.slug == artwork.slug
            assert found.title == artwork.title

    def test_get_by_slug_missing_returns_none(self, clock):
        source = MagicMock(return_value=make_artworks(2))
        cache = ArtworkCache(loader=source, ttl_seconds=60, clock=clock)

        assert cache.get_by_slug("nonexistent") is None
        source.assert_called_once()

    def test_get_by_slug_uses_cached_collection(self, clock):
        source = MagicMock(return_value=make_artworks(2))
        cache = ArtworkCache(loader=source, ttl_seconds=60, clock=clock)

        cache.get_all()
        cache.get_by_slug("artwork-2")
        cache.get_by_slug("artwork-1")

        source.assert_called_once()

    def test_get_by_slug_propagates_source_failure(self, clock):
        source = MagicMock(side_effect=SourceUnavailableError("down"))
        cache = ArtworkCache(loader=source, ttl_seconds=60, clock=clock)

        with pytest.raises(SourceUnavailableError):
            cache.get_by_slug("artwork-1")

    def test_counts_follow_refreshed_snapshot(self, clock):
        source = MagicMock(side_effect=[make_artworks(5, featured=2), make_artworks(7, featured=3)])
        cache = ArtworkCache(loader=source, ttl_seconds=60, clock=clock)

        cache.get_all()
        assert (cache.count(), cache.featured_count()) == (5, 2)

        cache.refresh()
        assert (cache.count(), cache.featured_count()) == (7, 3)

    def test_counts_are_zero_before_first_fetch(self):
        cache = ArtworkCache(loader=MagicMock(), ttl_seconds=60)

        assert cache.count() == 0
        assert cache.featured_count() == 0


@pytest.mark.unit
def test_artist_cache_caches_absent_artist():
    source = MagicMock(return_value=None)
    cache = ArtistCache(loader=source, ttl_seconds=300)

    assert cache.get_artist() is None
    assert cache.get_artist() is None
    source.assert_called_once()


@pytest.mark.unit
def test_artist_cache_returns_artist():
    artist = Artist(id="recArtist", name="아남 배옥영")
    cache = ArtistCache(loader=lambda: artist, ttl_seconds=300)

    assert cache.get_artist() == artist
