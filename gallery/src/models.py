from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GalleryModel(BaseModel):
    """Immutable record serialised with camelCase keys (``imageUrl``, ``birthYear``)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_dict(self) -> dict:
        """Convert to the JSON-ready dictionary returned by the API."""
        return self.model_dump(by_alias=True, mode="json")


class Artwork(GalleryModel):
    """
    One artwork from the gallery's Airtable base.
    Records are parsed into this model by the Airtable client and held,
    unchanged, in the artwork cache until the next refresh.
    """

    # Required fields
    id: str = Field(..., description="Airtable record id, stable and unique")
    slug: str = Field(..., description="URL-safe unique identifier")
    title: str = Field(..., description="Primary (Korean) title")
    year: int = Field(..., description="Year of production")

    # Optional fields
    title_en: Optional[str] = Field(default=None, description="English title")
    medium: Optional[str] = None
    dimensions: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = Field(default=None, description="Medium-size image URL")
    image_id: Optional[str] = Field(
        default=None, description="Image number used by the optimised image paths"
    )
    number: Optional[int] = Field(default=None, description="Catalogue number")
    featured: bool = False
    category: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    available: Optional[bool] = None
    price: Optional[float] = None
    aspect_ratio: Optional[str] = None
    exhibition: Optional[str] = None
    series: Optional[str] = None
    technique: Optional[str] = None
    inspiration: Optional[str] = None
    symbolism: Optional[str] = None
    cultural_context: Optional[str] = None


class Artist(GalleryModel):
    id: str
    name: str
    bio: Optional[str] = None
    statement: Optional[str] = None
    profile_image_url: Optional[str] = None
    birth_year: Optional[int] = None
    education: list[str] = Field(default_factory=list)
    exhibitions: list[str] = Field(default_factory=list)
    awards: list[str] = Field(default_factory=list)
    collections: list[str] = Field(default_factory=list)
