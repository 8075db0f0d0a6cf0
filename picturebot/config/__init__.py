"""Configuration loading for PictureBot.

Usage:
    from picturebot.config import get_settings

    settings = get_settings()
    backend = settings.storage.backend
"""

from functools import lru_cache

from picturebot.config.loader import load_config
from picturebot.config.settings import Settings, set_toml_config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the process-wide settings instance.

    The result is cached; call `reload_settings()` (or
    `get_settings.cache_clear()`) to pick up changed files or env vars.
    """
    set_toml_config(load_config())
    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
