"""Configuration management for wikicache."""

from .loader import Config, default_config_path, load_config, save_config
from .models import (
    CacheConfig,
    ConfigModel,
    LLMConfig,
    LocationConfig,
    PostgresConfig,
    WikipediaConfig,
)

__all__ = [
    "Config",
    "ConfigModel",
    "CacheConfig",
    "LLMConfig",
    "LocationConfig",
    "PostgresConfig",
    "WikipediaConfig",
    "default_config_path",
    "load_config",
    "save_config",
]
