from django.urls import path

from gallery.api.views import (
    artist_view,
    artworks_view,
    cache_info_view,
    revalidate_view,
)

urlpatterns = [
    path("artworks/", artworks_view, name="api-artworks"),
    path("artist/", artist_view, name="api-artist"),
    path("revalidate/", revalidate_view, name="api-revalidate"),
    path("cache/", cache_info_view, name="api-cache-info"),
]
