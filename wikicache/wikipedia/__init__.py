"""Wikipedia API access."""

from .client import WikipediaClient
from .models import GeoResult, PageDetails, SearchResult

__all__ = ["WikipediaClient", "GeoResult", "PageDetails", "SearchResult"]
