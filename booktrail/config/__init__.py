"""Configuration loading for booktrail.

Configuration is loaded from TOML files with environment variable overrides.

Usage:
    from booktrail.config import get_settings

    settings = get_settings()
    backend = settings.storage.backend
"""

from functools import lru_cache

from booktrail.config.loader import load_config
from booktrail.config.settings import Settings, set_toml_config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the singleton settings instance.

    The result is cached for the lifetime of the process.
    Call `get_settings.cache_clear()` or `reload_settings()` to reload.
    """
    set_toml_config(load_config())
    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
