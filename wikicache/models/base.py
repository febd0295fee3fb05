"""Base model class and time helpers shared by all models."""

from datetime import datetime

import pendulum
from pydantic import BaseModel, ConfigDict


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return pendulum.now("UTC")


class CacheModel(BaseModel):
    """Base model for cached records."""

    model_config = ConfigDict(from_attributes=True)
