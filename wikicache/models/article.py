"""Article model for cached Wikipedia pages."""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import Field, field_validator

from .base import CacheModel, utc_now


class Coordinates(CacheModel):
    """Geographic position of an article."""

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    lon: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees")


class Article(CacheModel):
    """Article model."""

    pageid: int = Field(..., description="Wikipedia page ID")
    title: str = Field(..., description="Article title")
    extract: str = Field("", description="Plain text summary of the article")
    thumbnail: Optional[str] = Field(None, description="Thumbnail image URL")
    full_url: str = Field(..., description="Canonical article URL")
    last_accessed: datetime = Field(default_factory=utc_now, description="Last time it was read")
    is_favorite: bool = Field(False, description="Whether the user saved the article")
    ai_summary: Optional[str] = Field(None, description="AI-generated summary")
    related_keywords: List[str] = Field(default_factory=list, description="Related keywords")
    coordinates: Optional[Coordinates] = Field(None, description="Geo coordinates if available")

    @field_validator("last_accessed")
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Naive timestamps are taken as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def has_location(self) -> bool:
        return self.coordinates is not None

    def touched(self, now: Optional[datetime] = None) -> "Article":
        """Copy of the article with last_accessed moved to now."""
        return self.model_copy(update={"last_accessed": now or utc_now()})
