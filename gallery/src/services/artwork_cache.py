"""Artwork and artist caches in front of the Airtable fetch."""

import time
from typing import Callable, Optional, Sequence

from gallery.src.models import Artist, Artwork
from gallery.src.services.snapshot_cache import SnapshotCache

ArtworkLoader = Callable[[], Sequence[Artwork]]


def count_featured(artworks: Sequence[Artwork]) -> int:
    return sum(1 for artwork in artworks if artwork.featured)


class ArtworkCache(SnapshotCache[tuple[Artwork, ...]]):
    """
    Owns the process-wide artwork collection.

    Every refresh replaces the whole collection; an empty collection is a
    valid snapshot and is cached like any other. Source failures propagate
    to all callers waiting on the failed fetch.
    """

    def __init__(
        self,
        loader: ArtworkLoader,
        ttl_seconds: float,
        wait_timeout: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(
            loader=lambda: tuple(loader()),
            ttl_seconds=ttl_seconds,
            name="artworks",
            wait_timeout=wait_timeout,
            clock=clock,
        )

    def get_all(self) -> tuple[Artwork, ...]:
        return self.get()

    def get_by_slug(self, slug: str) -> Artwork | None:
        """Return the artwork with this slug, or None if the loaded collection has none."""
        for artwork in self.get_all():
            if artwork.slug == slug:
                return artwork
        return None

    def count(self) -> int:
        return len(self.peek() or ())

    def featured_count(self) -> int:
        return count_featured(self.peek() or ())


class ArtistCache(SnapshotCache[Optional[Artist]]):
    def __init__(
        self,
        loader: Callable[[], Optional[Artist]],
        ttl_seconds: float,
        wait_timeout: Optional[float] = None,
    ):
        super().__init__(
            loader=loader,
            ttl_seconds=ttl_seconds,
            name="artist",
            wait_timeout=wait_timeout,
        )

    def get_artist(self) -> Artist | None:
        return self.get()
