"""
Base configuration settings.

Every citeparse setting is read from a CITEPARSE_-prefixed environment
variable or from a local .env file, case-insensitively. Config modules
inherit this source configuration and only declare fields.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "CITEPARSE_"


class CiteParseBaseSettings(BaseSettings):
    """Base configuration class reading CITEPARSE_* variables."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
