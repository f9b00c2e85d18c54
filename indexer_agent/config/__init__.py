"""Configuration loading for the indexer agent.

Configuration is loaded from TOML files with environment variable overrides.

Usage:
    from indexer_agent.config import get_settings

    settings = get_settings()
    target = settings.paused_target_node
"""

from functools import lru_cache

from indexer_agent.config.loader import load_config
from indexer_agent.config.settings import IndexerSettings, set_toml_config


@lru_cache(maxsize=1)
def get_settings() -> IndexerSettings:
    """Get the singleton settings instance.

    The result is cached for the lifetime of the process.
    Call `get_settings.cache_clear()` to reload configuration.
    """
    set_toml_config(load_config())
    return IndexerSettings()


def reload_settings() -> IndexerSettings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "IndexerSettings"]
