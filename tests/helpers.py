import asyncio
from typing import Dict, List, Optional

import httpx
import pendulum

from wikicache.models import Article

NOW = pendulum.datetime(2024, 5, 1, 12, 0, 0, tz="UTC")


def run(coro):
    return asyncio.run(coro)


def make_article(pageid: int, title: str, **fields) -> Article:
    data = {
        "pageid": pageid,
        "title": title,
        "extract": f"{title} is the subject of this article. It has a long history. Many people know it.",
        "full_url": "https://en.wikipedia.org/wiki/" + title.replace(" ", "_"),
        "last_accessed": NOW,
    }
    data.update(fields)
    return Article(**data)


def page_payload(
    pageid: int,
    title: str,
    extract: str = "",
    thumbnail: Optional[str] = None,
    coordinates: Optional[List[Dict]] = None,
) -> Dict:
    page = {
        "pageid": pageid,
        "ns": 0,
        "title": title,
        "extract": extract or f"{title} is a Wikipedia article.",
        "fullurl": "https://en.wikipedia.org/wiki/" + title.replace(" ", "_"),
        "canonicalurl": "https://en.wikipedia.org/wiki/" + title.replace(" ", "_"),
    }
    if thumbnail:
        page["thumbnail"] = {"source": thumbnail, "width": 300, "height": 200}
    if coordinates:
        page["coordinates"] = coordinates
    return page


class Clock:
    """Controllable replacement for the repository clock."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now.add(**kwargs)


class WikipediaAPIStub:
    """Fake Wikipedia action API served through httpx.MockTransport."""

    def __init__(self):
        self.search_results: List[Dict] = []
        self.geosearch_results: List[Dict] = []
        self.pages: Dict[int, Dict] = {}
        self.calls = {"search": 0, "details": 0, "geosearch": 0}
        self.requests: List[httpx.Request] = []
        self.fail = False
        self.fail_on: set = set()
        self.status_code = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        params = request.url.params

        if params.get("list") == "search":
            kind = "search"
        elif params.get("list") == "geosearch":
            kind = "geosearch"
        else:
            kind = "details"
        self.calls[kind] += 1

        if self.fail or kind in self.fail_on:
            raise httpx.ConnectError("network is unreachable", request=request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={})

        if kind == "search":
            return httpx.Response(200, json={"batchcomplete": "", "query": {"search": self.search_results}})
        if kind == "geosearch":
            return httpx.Response(200, json={"batchcomplete": "", "query": {"geosearch": self.geosearch_results}})

        pages = {}
        for raw_id in params["pageids"].split("|"):
            pageid = int(raw_id)
            pages[raw_id] = self.pages.get(pageid, {"pageid": pageid, "missing": ""})
        return httpx.Response(200, json={"batchcomplete": "", "query": {"pages": pages}})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def add_page(self, pageid: int, title: str, **kwargs) -> Dict:
        page = page_payload(pageid, title, **kwargs)
        self.pages[pageid] = page
        return page
