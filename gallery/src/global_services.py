"""
This module holds the caches shared by every request in the process.
There must be a single artwork cache per process, otherwise concurrent requests
could trigger parallel Airtable fetches.

From anywhere in the code, get the caches through the accessors in this module.
"""

import sys
import threading

from gallery.src.cache_registry import register_cache
from gallery.src.config import config
from gallery.src.exceptions import GalleryError
from gallery.src.services.artwork_cache import ArtistCache, ArtworkCache

artwork_cache_instance: ArtworkCache | None = None
artist_cache_instance: ArtistCache | None = None

_init_lock = threading.Lock()


def initialize_services(
    force: bool = False,
) -> tuple[ArtworkCache, ArtistCache] | None:
    """Build and register the process caches once. Returns them, or None when skipped."""
    # Only initialize if the command is not one of the ones that don't need it
    management_commands_to_skip = ["migrate", "collectstatic", "shell"]
    if (
        not force
        and len(sys.argv) > 1
        and sys.argv[1] in management_commands_to_skip
    ):
        return None
    global artwork_cache_instance, artist_cache_instance
    with _init_lock:
        from gallery.src.services.airtable_client import (
            fetch_artist_from_airtable,
            fetch_artworks_from_airtable,
        )

        # Waiters give up a little after the fetch deadline itself would have passed
        wait_timeout = config.airtable_fetch_timeout + config.airtable_request_timeout
        if artwork_cache_instance is None:
            artwork_cache_instance = ArtworkCache(
                loader=fetch_artworks_from_airtable,
                ttl_seconds=config.artwork_cache_ttl,
                wait_timeout=wait_timeout,
            )
            register_cache("artworks", artwork_cache_instance)
        if artist_cache_instance is None:
            artist_cache_instance = ArtistCache(
                loader=fetch_artist_from_airtable,
                ttl_seconds=config.artist_cache_ttl,
                wait_timeout=wait_timeout,
            )
            register_cache("artist", artist_cache_instance)
        return artwork_cache_instance, artist_cache_instance


def get_artwork_cache() -> ArtworkCache:
    if artwork_cache_instance is not None:
        return artwork_cache_instance
    return _force_initialize()[0]


def get_artist_cache() -> ArtistCache:
    if artist_cache_instance is not None:
        return artist_cache_instance
    return _force_initialize()[1]


def _force_initialize() -> tuple[ArtworkCache, ArtistCache]:
    caches = initialize_services(force=True)
    if caches is None:
        raise GalleryError("Gallery caches could not be initialized")
    return caches
