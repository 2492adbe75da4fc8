"""
Configuration management package for Awraris

Settings are loaded from YAML files, a .env file and environment variables,
in that order of increasing precedence, and shared through a singleton:

    from awraris.config import get_settings

    settings = get_settings()
    store_path = settings.get_playlists_path()
"""

from .settings import get_settings, reload_settings, Settings

__all__ = [
    'get_settings',      # Factory function for singleton settings access
    'reload_settings',   # Function to reload settings from files
    'Settings',          # Settings class for direct instantiation
]
