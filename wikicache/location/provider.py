"""Location providers used to parameterize nearby searches."""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional, Set

import httpx
from rich.console import Console

from ..config import LocationConfig
from ..models import Coordinates

console = Console(stderr=True)


class LocationProvider(ABC):
    """
    Single-shot source of the user's current coordinates.

    ``current_location`` resolves to None when permission is missing or the
    lookup fails. Cancelling the awaiting task cancels the lookup;
    ``cleanup`` cancels outstanding lookups, whose callers then get None.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._pending: Set[asyncio.Future] = set()

    def has_permission(self) -> bool:
        """Whether location access is permitted."""
        return self.enabled

    @abstractmethod
    async def _request_location(self) -> Optional[Coordinates]:
        """Perform the actual lookup."""
        pass

    async def current_location(self) -> Optional[Coordinates]:
        """Fetch the current coordinates once."""
        if not self.has_permission():
            return None

        task = asyncio.ensure_future(self._request_location())
        self._pending.add(task)
        try:
            await asyncio.wait({task})
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            self._pending.discard(task)

        if task.cancelled():
            return None
        error = task.exception()
        if error is not None:
            console.print(f"[red]Error getting location: {error}[/red]")
            return None
        return task.result()

    def cleanup(self) -> None:
        """Cancel any outstanding lookup."""
        for task in list(self._pending):
            task.cancel()


class FixedLocationProvider(LocationProvider):
    """Coordinates taken from configuration."""

    def __init__(self, coordinates: Optional[Coordinates], enabled: bool = True) -> None:
        super().__init__(enabled=enabled)
        self.coordinates = coordinates

    async def _request_location(self) -> Optional[Coordinates]:
        return self.coordinates


class IPLocationProvider(LocationProvider):
    """Approximate coordinates from an IP geolocation service."""

    def __init__(
        self,
        lookup_url: str = "https://ipapi.co/json/",
        timeout: float = 10.0,
        enabled: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(enabled=enabled)
        self.lookup_url = lookup_url
        self.timeout = timeout
        self.transport = transport

    async def _request_location(self) -> Optional[Coordinates]:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(self.lookup_url)
            response.raise_for_status()
            data = response.json()

        if data.get("latitude") is None or data.get("longitude") is None:
            return None
        return Coordinates(lat=data["latitude"], lon=data["longitude"])


def create_location_provider(
    config: LocationConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> LocationProvider:
    """Build the configured location provider."""
    if config.provider == "ip":
        return IPLocationProvider(
            lookup_url=config.lookup_url,
            timeout=config.timeout,
            enabled=config.enabled,
            transport=transport,
        )

    if config.provider != "fixed":
        console.print(f"[yellow]Warning: Unknown location provider '{config.provider}'. Using fixed location.[/yellow]")

    coordinates = None
    if config.latitude is not None and config.longitude is not None:
        coordinates = Coordinates(lat=config.latitude, lon=config.longitude)
    return FixedLocationProvider(coordinates, enabled=config.enabled)
