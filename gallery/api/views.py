import json
import logging
import secrets

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST
from django_ratelimit.decorators import ratelimit

from gallery.api.utils import envelope, get_client_ip
from gallery.src import cache_registry
from gallery.src.config import config
from gallery.src.exceptions import SourceUnavailableError
from gallery.src.global_services import get_artist_cache, get_artwork_cache
from gallery.src.services.artwork_cache import count_featured

logger = logging.getLogger(__name__)

REFRESH_ACTION = "refresh"
ALL_CACHES_TAG = "all"

NO_ARTWORKS_MESSAGE = "No artworks available"
FETCH_FAILED_MESSAGE = "Failed to fetch artworks"
REFRESH_OK_MESSAGE = "Cache refreshed successfully"
REFRESH_FAILED_MESSAGE = "Failed to refresh cache"
INVALID_ACTION_MESSAGE = "Invalid action. Use ?action=refresh to refresh cache"
RATE_LIMITED_MESSAGE = "Too many requests. Please try again later."


@csrf_exempt
@ratelimit(key=get_client_ip, rate="10/m", method="POST", block=False)
@require_http_methods(["GET", "POST"])
def artworks_view(request: HttpRequest) -> JsonResponse:
    """
    GET: the whole collection, or one artwork with ``?slug=``.
    POST: the cache refresh command, ``?action=refresh``.

    Always answers HTTP 200 (429 when rate limited) with the
    ``{success, data, message?, error?}`` envelope.
    """
    if request.method == "POST":
        if getattr(request, "limited", False):
            return envelope(False, message=RATE_LIMITED_MESSAGE, status=429)
        return _refresh_artworks(request)

    slug = request.GET.get("slug", "").strip()
    if slug:
        return _artwork_by_slug(slug)
    return _all_artworks()


def _all_artworks() -> JsonResponse:
    try:
        artworks = get_artwork_cache().get_all()
    except SourceUnavailableError as e:
        logger.warning(f"Failed to fetch artworks: {e}")
        return envelope(False, data=None, message=FETCH_FAILED_MESSAGE)

    if not artworks:
        return envelope(False, data=[], message=NO_ARTWORKS_MESSAGE)
    return envelope(True, data=[artwork.to_dict() for artwork in artworks])


def _artwork_by_slug(slug: str) -> JsonResponse:
    try:
        artwork = get_artwork_cache().get_by_slug(slug)
    except SourceUnavailableError as e:
        logger.warning(f"Failed to fetch artworks for slug '{slug}': {e}")
        return envelope(False, data=None, message=FETCH_FAILED_MESSAGE)

    # Not found is not a failure
    return envelope(True, data=artwork.to_dict() if artwork else None)


def _refresh_artworks(request: HttpRequest) -> JsonResponse:
    if request.GET.get("action") != REFRESH_ACTION:
        return envelope(False, message=INVALID_ACTION_MESSAGE)

    try:
        artworks = get_artwork_cache().refresh()
    except SourceUnavailableError as e:
        logger.error(f"Failed to refresh artwork cache: {e}")
        return envelope(False, message=REFRESH_FAILED_MESSAGE, error=str(e))

    # Counts come from the refreshed snapshot, not from a later read of the cache
    return envelope(
        True,
        data={"count": len(artworks), "featuredCount": count_featured(artworks)},
        message=REFRESH_OK_MESSAGE,
    )


@require_GET
def artist_view(request: HttpRequest) -> JsonResponse:
    try:
        artist = get_artist_cache().get_artist()
    except SourceUnavailableError as e:
        logger.warning(f"Failed to fetch artist: {e}")
        return envelope(False, data=None, message="Failed to fetch artist")

    if artist is None:
        return envelope(False, data=None, message="Artist not available")
    return envelope(True, data=artist.to_dict())


@csrf_exempt
@require_POST
def revalidate_view(request: HttpRequest) -> JsonResponse:
    """
    Invalidate a cache by tag (``artworks``, ``artist`` or ``all``).
    Body: ``{"tag": "...", "secret": "..."}``. The secret is only checked
    when REVALIDATE_SECRET is configured.
    """
    try:
        body = json.loads(request.body or b"{}")
    except (ValueError, UnicodeDecodeError):
        return envelope(False, message="Invalid JSON body", status=400)
    if not isinstance(body, dict):
        return envelope(False, message="Invalid JSON body", status=400)

    if config.revalidate_secret and not secrets.compare_digest(
        str(body.get("secret", "")), config.revalidate_secret
    ):
        return envelope(False, message="Invalid secret", status=401)

    tag = body.get("tag")
    if not tag or not isinstance(tag, str):
        return envelope(False, message="Missing tag parameter", status=400)

    if tag == ALL_CACHES_TAG:
        cache_registry.clear_all_caches()
    elif tag in cache_registry.get_registered_tags():
        cache_registry.invalidate_cache(tag)
    else:
        return envelope(False, message=f"Unknown cache tag: {tag}", status=400)

    logger.info(f"Revalidated cache '{tag}'")
    return envelope(
        True,
        data={"revalidated": True, "tag": tag},
        message="Cache revalidated successfully",
    )


@require_GET
def cache_info_view(request: HttpRequest) -> JsonResponse:
    # Make sure the process caches exist before reporting on them
    get_artwork_cache()
    return envelope(True, data=cache_registry.get_cache_info())
