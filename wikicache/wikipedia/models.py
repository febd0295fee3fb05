"""Data models for Wikipedia API responses."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..models import Article, Coordinates


class SearchResult(BaseModel):
    """Entry of a ``list=search`` response."""

    pageid: int = Field(..., description="Page ID")
    title: str = Field(..., description="Page title")
    snippet: str = Field("", description="Highlighted HTML snippet")


class ThumbnailInfo(BaseModel):
    source: str
    width: Optional[int] = None
    height: Optional[int] = None


class PageCoordinate(BaseModel):
    lat: float
    lon: float
    primary: Optional[str] = None


class PageDetails(BaseModel):
    """Page entry of a ``prop=extracts|pageimages|coordinates|info`` response."""

    pageid: int = Field(..., description="Page ID")
    title: str = Field(..., description="Page title")
    extract: str = Field("", description="Plain text intro")
    fullurl: str = Field(..., description="Canonical page URL")
    thumbnail: Optional[ThumbnailInfo] = Field(None, description="Page image thumbnail")
    coordinates: Optional[List[PageCoordinate]] = Field(None, description="Page coordinates")

    def to_article(self, last_accessed: Optional[datetime] = None) -> Article:
        """Map the page into a fresh, non-favorite article without summary."""
        coordinates = None
        if self.coordinates:
            first = self.coordinates[0]
            coordinates = Coordinates(lat=first.lat, lon=first.lon)

        article = Article(
            pageid=self.pageid,
            title=self.title,
            extract=self.extract,
            thumbnail=self.thumbnail.source if self.thumbnail else None,
            full_url=self.fullurl,
            coordinates=coordinates,
        )
        if last_accessed is not None:
            article = article.touched(last_accessed)
        return article


class GeoResult(BaseModel):
    """Entry of a ``list=geosearch`` response."""

    pageid: int = Field(..., description="Page ID")
    title: str = Field(..., description="Page title")
    lat: float = Field(..., description="Latitude")
    lon: float = Field(..., description="Longitude")
    dist: float = Field(..., description="Distance from the query point in meters")


class SearchQuery(BaseModel):
    search: List[SearchResult] = Field(default_factory=list)


class SearchResponse(BaseModel):
    query: SearchQuery


class DetailsQuery(BaseModel):
    pages: Dict[str, PageDetails] = Field(default_factory=dict)


class DetailsResponse(BaseModel):
    query: DetailsQuery


class GeoQuery(BaseModel):
    geosearch: List[GeoResult] = Field(default_factory=list)


class GeoResponse(BaseModel):
    query: GeoQuery
