"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator
"""

from functools import lru_cache

from pydantic import Field

from citeparse.configs.base import CiteParseBaseSettings
from citeparse.configs.parsing import ParsingSettings


class Settings(CiteParseBaseSettings):
    """Unified settings aggregating all config modules."""

    parsing: ParsingSettings = Field(default_factory=ParsingSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get settings singleton.

    Environment variables are read once; call get_settings.cache_clear()
    to pick up changes.

    Returns:
        Settings: Settings instance

    Usage:
        from citeparse.configs import get_settings
        settings = get_settings()
    """
    return Settings()
