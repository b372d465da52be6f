"""Turn raw Airtable records into Artwork and Artist models."""

import logging
from typing import Any, Optional
from django.utils.text import slugify
from pydantic import ValidationError

from gallery.src.models import Artist, Artwork

logger = logging.getLogger(__name__)

# Field names differ between bases (Korean labels, English labels, camelCase).
# The first non-empty field in each list wins.
ARTWORK_FIELD_MAP: dict[str, list[str]] = {
    "slug": ["Slug", "slug"],
    "title": ["Title (Korean)", "Title", "title", "제목"],
    "title_en": ["Title (English)", "titleEn"],
    "year": ["Year", "year", "연도"],
    "medium": ["Medium (Korean)", "Medium", "medium", "재료"],
    "dimensions": ["Dimensions (Korean)", "Dimensions", "dimensions", "크기"],
    "description": ["Description (Korean)", "Description", "description", "설명"],
    "image": ["Image", "Images", "image"],
    "image_url": ["Image URL", "imageUrl"],
    "image_id": ["Image ID", "imageId"],
    "number": ["Number", "number"],
    "featured": ["Featured", "featured"],
    "category": ["Category", "category"],
    "tags": ["Tags", "tags"],
    "available": ["Available", "available"],
    "price": ["Price", "price"],
    "aspect_ratio": ["Aspect Ratio", "aspectRatio"],
    "exhibition": ["Exhibition", "exhibition"],
    "series": ["Series", "series"],
    "technique": ["Technique", "technique"],
    "inspiration": ["Inspiration", "inspiration"],
    "symbolism": ["Symbolism", "symbolism"],
    "cultural_context": ["Cultural Context", "culturalContext"],
}

ARTIST_FIELD_MAP: dict[str, list[str]] = {
    "name": ["Name", "name", "이름"],
    "bio": ["Bio", "bio", "약력"],
    "statement": ["Statement", "Artist Statement", "statement"],
    "profile_image": ["Profile Image", "Photo", "profileImage"],
    "profile_image_url": ["Profile Image URL", "profileImageUrl"],
    "birth_year": ["Birth Year", "birthYear"],
    "education": ["Education", "education"],
    "exhibitions": ["Exhibitions", "exhibitions"],
    "awards": ["Awards", "awards"],
    "collections": ["Collections", "collections"],
}

TRUE_STRINGS = {"true", "yes", "y", "1", "checked"}


def get_field_value(fields: dict[str, Any], field_names: list[str]) -> Any:
    for field_name in field_names:
        value = fields.get(field_name)
        if value is not None and value != "" and value != []:
            return value
    return None


def _pick(fields: dict[str, Any], field_map: dict[str, list[str]], key: str) -> Any:
    return get_field_value(fields, field_map.get(key, [key]))


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, list):
        value = ", ".join(str(item) for item in value)
    text = str(value).strip()
    return text or None


def _as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(str(value).replace(",", ""))
    except (TypeError, ValueError):
        return None


def _as_bool(value: Any) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_STRINGS


def _as_str_list(value: Any) -> list[str]:
    """Multi-select fields arrive as lists, long-text fields as comma or newline separated text."""
    if value is None:
        return []
    if isinstance(value, list):
        items = [str(item).strip() for item in value]
    else:
        separator = "\n" if "\n" in str(value) else ","
        items = [item.strip() for item in str(value).split(separator)]
    return [item for item in items if item]


def _attachment_url(value: Any) -> Optional[str]:
    """Return the URL of the first attachment (or the value itself if it is plain text)."""
    if isinstance(value, list) and value:
        first = value[0]
        if isinstance(first, dict):
            large = first.get("thumbnails", {}).get("large", {}).get("url")
            return first.get("url") or large
        return _as_str(first)
    return _as_str(value)


def optimized_image_url(image_id: str, size: str = "medium") -> str:
    return f"/Images/Artworks/optimized/{image_id}/{image_id}-{size}.jpg"


def _derive_slug(record_id: str, fields: dict[str, Any], title: str, number: Optional[int]) -> str:
    explicit = _as_str(_pick(fields, ARTWORK_FIELD_MAP, "slug"))
    if explicit:
        return slugify(explicit, allow_unicode=True) or explicit
    for candidate in (_as_str(_pick(fields, ARTWORK_FIELD_MAP, "title_en")), title):
        if candidate:
            slug = slugify(candidate, allow_unicode=True)
            if slug:
                return slug
    if number is not None:
        return f"artwork-{number}"
    return record_id.lower()


def parse_artwork(record: dict[str, Any]) -> Optional[Artwork]:
    """Build an Artwork from one Airtable record, or None if it lacks a title or year."""
    if not isinstance(record, dict):
        logger.warning(f"Skipping malformed Airtable record: {record!r}")
        return None
    record_id = record.get("id")
    fields = record.get("fields") or {}
    if not isinstance(fields, dict):
        logger.warning(f"Skipping Airtable record {record_id} with malformed fields")
        return None
    if not record_id:
        logger.warning(f"Skipping Airtable record without id: {record}")
        return None

    title = _as_str(_pick(fields, ARTWORK_FIELD_MAP, "title"))
    if not title:
        logger.warning(f"Skipping artwork {record_id} with missing title")
        return None
    year = _as_int(_pick(fields, ARTWORK_FIELD_MAP, "year"))
    if year is None:
        logger.warning(f"Skipping artwork {record_id} with missing or invalid year")
        return None

    number = _as_int(_pick(fields, ARTWORK_FIELD_MAP, "number"))
    image_id = _as_str(_pick(fields, ARTWORK_FIELD_MAP, "image_id"))
    if image_id is None and number is not None:
        image_id = f"{number:02d}"
    image_url = _attachment_url(_pick(fields, ARTWORK_FIELD_MAP, "image")) or _as_str(
        _pick(fields, ARTWORK_FIELD_MAP, "image_url")
    )
    if image_url is None and image_id is not None:
        image_url = optimized_image_url(image_id)

    try:
        return Artwork(
            id=record_id,
            slug=_derive_slug(record_id, fields, title, number),
            title=title,
            title_en=_as_str(_pick(fields, ARTWORK_FIELD_MAP, "title_en")),
            year=year,
            medium=_as_str(_pick(fields, ARTWORK_FIELD_MAP, "medium")),
            dimensions=_as_str(_pick(fields, ARTWORK_FIELD_MAP, "dimensions")),
            description=_as_str(_pick(fields, ARTWORK_FIELD_MAP, "description")),
            image_url=image_url,
            image_id=image_id,
            number=number,
            featured=bool(_as_bool(_pick(fields, ARTWORK_FIELD_MAP, "featured"))),
            category=_as_str(_pick(fields, ARTWORK_FIELD_MAP, "category")),
            tags=_as_str_list(_pick(fields, ARTWORK_FIELD_MAP, "tags")),
            available=_as_bool(_pick(fields, ARTWORK_FIELD_MAP, "available")),
            price=_as_float(_pick(fields, ARTWORK_FIELD_MAP, "price")),
            aspect_ratio=_as_str(_pick(fields, ARTWORK_FIELD_MAP, "aspect_ratio")),
            exhibition=_as_str(_pick(fields, ARTWORK_FIELD_MAP, "exhibition")),
            series=_as_str(_pick(fields, ARTWORK_FIELD_MAP, "series")),
            technique=_as_str(_pick(fields, ARTWORK_FIELD_MAP, "technique")),
            inspiration=_as_str(_pick(fields, ARTWORK_FIELD_MAP, "inspiration")),
            symbolism=_as_str(_pick(fields, ARTWORK_FIELD_MAP, "symbolism")),
            cultural_context=_as_str(
                _pick(fields, ARTWORK_FIELD_MAP, "cultural_context")
            ),
        )
    except ValidationError as e:
        logger.warning(f"Skipping artwork {record_id} with invalid fields: {e}")
        return None


def parse_artworks(records: list[dict[str, Any]]) -> tuple[Artwork, ...]:
    """
    Parse a full table of records.

    Slugs must be unique across the collection: a record whose slug is already
    taken gets a numeric suffix (``-2``, ``-3``, ...). Duplicate record ids are
    dropped.
    """
    artworks: list[Artwork] = []
    seen_ids: set[str] = set()
    seen_slugs: set[str] = set()

    for record in records:
        artwork = parse_artwork(record)
        if artwork is None:
            continue
        if artwork.id in seen_ids:
            logger.warning(f"Skipping duplicate artwork record {artwork.id}")
            continue

        slug = artwork.slug
        suffix = 2
        while slug in seen_slugs:
            slug = f"{artwork.slug}-{suffix}"
            suffix += 1
        if slug != artwork.slug:
            logger.warning(
                f"Slug '{artwork.slug}' of artwork {artwork.id} is taken, using '{slug}'"
            )
            artwork = artwork.model_copy(update={"slug": slug})

        seen_ids.add(artwork.id)
        seen_slugs.add(slug)
        artworks.append(artwork)

    return tuple(artworks)


def parse_artist(records: list[dict[str, Any]]) -> Optional[Artist]:
    """Return the first record with a name as the gallery's artist."""
    for record in records:
        if not isinstance(record, dict) or not isinstance(record.get("fields") or {}, dict):
            logger.warning(f"Skipping malformed artist record: {record!r}")
            continue
        fields = record.get("fields") or {}
        name = _as_str(_pick(fields, ARTIST_FIELD_MAP, "name"))
        if not record.get("id") or not name:
            logger.warning(f"Skipping artist record without id or name: {record.get('id')}")
            continue
        profile_image_url = _attachment_url(
            _pick(fields, ARTIST_FIELD_MAP, "profile_image")
        ) or _as_str(_pick(fields, ARTIST_FIELD_MAP, "profile_image_url"))
        return Artist(
            id=record["id"],
            name=name,
            bio=_as_str(_pick(fields, ARTIST_FIELD_MAP, "bio")),
            statement=_as_str(_pick(fields, ARTIST_FIELD_MAP, "statement")),
            profile_image_url=profile_image_url,
            birth_year=_as_int(_pick(fields, ARTIST_FIELD_MAP, "birth_year")),
            education=_as_str_list(_pick(fields, ARTIST_FIELD_MAP, "education")),
            exhibitions=_as_str_list(_pick(fields, ARTIST_FIELD_MAP, "exhibitions")),
            awards=_as_str_list(_pick(fields, ARTIST_FIELD_MAP, "awards")),
            collections=_as_str_list(_pick(fields, ARTIST_FIELD_MAP, "collections")),
        )
    return None
