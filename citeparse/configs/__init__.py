"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
"""

from citeparse.configs.parsing import ParsingSettings
from citeparse.configs.settings import Settings, get_settings

__all__ = ["ParsingSettings", "Settings", "get_settings"]
