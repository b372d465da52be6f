import os
from pathlib import Path
import dotenv
from pydantic import BaseModel


class Config(BaseModel):
    airtable_api_key: str = ""
    airtable_base_id: str = ""
    airtable_artworks_table: str = "Artworks"
    airtable_artist_table: str = "Artist"
    airtable_artworks_view: str | None = None
    # Seconds per HTTP call, and for a whole paginated fetch
    airtable_request_timeout: float = 10.0
    airtable_fetch_timeout: float = 30.0

    artwork_cache_ttl: float = 60.0
    artist_cache_ttl: float = 300.0
    revalidate_secret: str | None = None

    django_secret_key: str = "django-insecure-gallery-dev-key"
    allowed_hosts: list[str] = []
    debug: bool = False


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def create_config():
    env_files = [".env.dev", ".env.prod"]
    for env_file in env_files:
        if Path(env_file).exists():
            dotenv.load_dotenv(env_file)
            break

    airtable_api_key = os.getenv("AIRTABLE_API_KEY", "")
    airtable_base_id = os.getenv("AIRTABLE_BASE_ID", "")
    airtable_artworks_table = os.getenv("AIRTABLE_ARTWORKS_TABLE", "Artworks")
    airtable_artist_table = os.getenv("AIRTABLE_ARTIST_TABLE", "Artist")
    airtable_artworks_view = os.getenv("AIRTABLE_ARTWORKS_VIEW") or None
    airtable_request_timeout = _get_float("AIRTABLE_REQUEST_TIMEOUT", 10.0)
    airtable_fetch_timeout = _get_float("AIRTABLE_FETCH_TIMEOUT", 30.0)

    # Cache lifetimes (seconds)
    artwork_cache_ttl = _get_float("ARTWORK_CACHE_TTL", 60.0)
    artist_cache_ttl = _get_float("ARTIST_CACHE_TTL", 300.0)
    revalidate_secret = os.getenv("REVALIDATE_SECRET") or None

    django_secret_key = os.getenv(
        "DJANGO_SECRET_KEY", "django-insecure-gallery-dev-key"
    )
    debug = os.getenv("DEBUG", "False").lower() == "true"
    allowed_hosts = [
        host.strip()
        for host in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
        if host.strip()
    ]

    if not airtable_artworks_table:
        raise ValueError("AIRTABLE_ARTWORKS_TABLE is empty")
    if not airtable_artist_table:
        raise ValueError("AIRTABLE_ARTIST_TABLE is empty")

    return Config(
        airtable_api_key=airtable_api_key,
        airtable_base_id=airtable_base_id,
        airtable_artworks_table=airtable_artworks_table,
        airtable_artist_table=airtable_artist_table,
        airtable_artworks_view=airtable_artworks_view,
        airtable_request_timeout=airtable_request_timeout,
        airtable_fetch_timeout=airtable_fetch_timeout,
        artwork_cache_ttl=artwork_cache_ttl,
        artist_cache_ttl=artist_cache_ttl,
        revalidate_secret=revalidate_secret,
        django_secret_key=django_secret_key,
        allowed_hosts=allowed_hosts,
        debug=debug,
    )


config = create_config()

if __name__ == "__main__":
    config = create_config()
    print(config)
