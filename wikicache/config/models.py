"""Configuration models."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("wikicache", description="Database name")
    user: str = Field("wikicache_user", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(None, description="Environment variable for password")


class CacheConfig(BaseModel):
    """Article cache policy."""

    backend: str = Field("postgres", description="Article store backend (postgres, memory)")
    max_age_days: int = Field(30, description="Evict non-favorites not accessed for this long", ge=1)
    stale_after_days: int = Field(
        7, description="Cached search hits older than this trigger a remote refresh", ge=1
    )
    min_cached_results: int = Field(
        1, description="Minimum local title hits needed to skip the remote search", ge=1
    )
    recent_limit: int = Field(10, description="Default size of the recent articles list", ge=1, le=100)

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        """Only known store backends are accepted."""
        if v not in ("postgres", "memory"):
            raise ValueError(f"Unknown cache backend: {v}")
        return v


class WikipediaConfig(BaseModel):
    """Wikipedia API configuration."""

    api_url: str = Field("https://en.wikipedia.org/w/api.php", description="action=query endpoint")
    user_agent: str = Field(
        "wikicache/0.1 (https://github.com/wikicache/wikicache)",
        description="User-Agent sent with every request",
    )
    timeout: float = Field(30.0, description="Request timeout in seconds", gt=0)
    search_limit: int = Field(20, description="Max search results; extracts come back in batches of 20", ge=1, le=20)
    geosearch_radius: int = Field(10000, description="Geosearch radius in meters", ge=10, le=10000)
    geosearch_limit: int = Field(20, description="Max geosearch results; extracts come back in batches of 20", ge=1, le=20)
    thumbnail_size: int = Field(300, description="Thumbnail width in pixels", ge=1)


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: str = Field("openai", description="LLM provider (openai, mock)")
    model: str = Field("gpt-3.5-turbo-instruct", description="Completion model name")
    api_key_env: Optional[str] = Field("OPENAI_API_KEY", description="Environment variable for API key")
    api_key: Optional[str] = Field(None, description="API key (prefer api_key_env)")
    base_url: Optional[str] = Field(None, description="Base URL for API")
    max_input_chars: int = Field(3000, description="Extract characters sent for summarization", ge=1)
    max_tokens: int = Field(150, description="Max summary tokens", ge=1)
    temperature: float = Field(0.5, ge=0.0, le=2.0)


class LocationConfig(BaseModel):
    """Location source configuration."""

    provider: str = Field("fixed", description="Location provider (fixed, ip)")
    enabled: bool = Field(False, description="Whether location access is permitted")
    latitude: Optional[float] = Field(None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(None, ge=-180.0, le=180.0)
    lookup_url: str = Field("https://ipapi.co/json/", description="IP geolocation endpoint")
    timeout: float = Field(10.0, gt=0)

    @model_validator(mode="after")
    def validate_coordinates(self) -> "LocationConfig":
        """Latitude and longitude must be given together."""
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be set together")
        return self


class ConfigModel(BaseModel):
    """Main configuration model."""

    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    wikipedia: WikipediaConfig = Field(default_factory=WikipediaConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    location: LocationConfig = Field(default_factory=LocationConfig)
