"""Wikipedia action API client."""

from typing import Any, Dict, Iterable, List, Optional

import httpx

from ..config import WikipediaConfig
from .models import (
    DetailsResponse,
    GeoResponse,
    GeoResult,
    PageDetails,
    SearchResponse,
    SearchResult,
)


class WikipediaClient:
    """
    Issue search, detail and geosearch queries against the Wikipedia API.

    Every call is a single request with no caching and no retries.
    Transport errors (``httpx.HTTPError``) and malformed payloads
    (``pydantic.ValidationError``) propagate to the caller.
    """

    def __init__(
        self,
        api_url: str = "https://en.wikipedia.org/w/api.php",
        user_agent: str = "wikicache/0.1 (https://github.com/wikicache/wikicache)",
        timeout: float = 30.0,
        search_limit: int = 20,
        geosearch_radius: int = 10000,
        geosearch_limit: int = 20,
        thumbnail_size: int = 300,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize Wikipedia client.

        Args:
            api_url: action=query endpoint
            user_agent: User-Agent header, required by Wikimedia policy
            timeout: Request timeout in seconds
            search_limit: srlimit for text search
            geosearch_radius: gsradius in meters
            geosearch_limit: gslimit for geosearch
            thumbnail_size: pithumbsize for page images
            transport: Custom httpx transport (for testing)
        """
        self.api_url = api_url
        self.user_agent = user_agent
        self.timeout = timeout
        self.search_limit = search_limit
        self.geosearch_radius = geosearch_radius
        self.geosearch_limit = geosearch_limit
        self.thumbnail_size = thumbnail_size
        self.transport = transport

    @classmethod
    def from_config(
        cls,
        config: WikipediaConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "WikipediaClient":
        return cls(
            api_url=config.api_url,
            user_agent=config.user_agent,
            timeout=config.timeout,
            search_limit=config.search_limit,
            geosearch_radius=config.geosearch_radius,
            geosearch_limit=config.geosearch_limit,
            thumbnail_size=config.thumbnail_size,
            transport=transport,
        )

    async def _query(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Run one action=query request and return the decoded payload."""
        request_params = {"action": "query", "format": "json", "utf8": 1, **params}
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}

        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=headers,
            transport=self.transport,
        ) as client:
            response = await client.get(self.api_url, params=request_params)
            response.raise_for_status()
            payload = response.json()

        if "error" in payload:
            error = payload["error"]
            raise ValueError(f"Wikipedia API error {error.get('code')}: {error.get('info')}")

        return payload

    async def search(self, text: str) -> List[SearchResult]:
        """Full text search over article titles and bodies."""
        payload = await self._query({
            "list": "search",
            "srsearch": text,
            "srlimit": self.search_limit,
        })
        return SearchResponse.model_validate(payload).query.search

    async def fetch_details(self, pageids: Iterable[int]) -> Dict[int, PageDetails]:
        """Fetch extract, thumbnail, coordinates and URL for a batch of pages."""
        ids = [str(pageid) for pageid in pageids]
        if not ids:
            return {}

        payload = await self._query({
            "prop": "extracts|pageimages|coordinates|info",
            "pageids": "|".join(ids),
            "explaintext": 1,
            "exsectionformat": "plain",
            "exintro": 1,
            "exlimit": "max",
            "piprop": "thumbnail",
            "pithumbsize": self.thumbnail_size,
            "inprop": "url",
        })

        # Unknown or deleted page IDs come back flagged instead of omitted
        query = payload.get("query")
        if isinstance(query, dict) and isinstance(query.get("pages"), dict):
            query["pages"] = {
                key: page for key, page in query["pages"].items()
                if "missing" not in page and "invalid" not in page
            }

        details = DetailsResponse.model_validate(payload).query.pages
        return {page.pageid: page for page in details.values()}

    async def geosearch(self, lat: float, lon: float) -> List[GeoResult]:
        """Pages within the configured radius of a coordinate."""
        payload = await self._query({
            "list": "geosearch",
            "gscoord": f"{lat}|{lon}",
            "gsradius": self.geosearch_radius,
            "gslimit": self.geosearch_limit,
        })
        return GeoResponse.model_validate(payload).query.geosearch
