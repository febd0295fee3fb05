"""Location sources."""

from .provider import (
    FixedLocationProvider,
    IPLocationProvider,
    LocationProvider,
    create_location_provider,
)

__all__ = [
    "FixedLocationProvider",
    "IPLocationProvider",
    "LocationProvider",
    "create_location_provider",
]
