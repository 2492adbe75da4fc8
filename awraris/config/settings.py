"""
Configuration management for Awraris

This module handles loading, validation, and management of application settings
from multiple sources including YAML files and environment variables. It provides
a centralized configuration system that supports reloading and validation.

The configuration is organized into logical sections using dataclasses:
- Player discovery preferences
- Search provider selection and result limits
- Stream resolution (yt-dlp) options
- Playlist storage location
- Logging and storage directories

The YouTube Data API key is only ever read from the environment (or a .env file)
and is never written back to the YAML configuration.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables from .env file if present
load_dotenv()


SEARCH_PROVIDERS = ('youtube', 'ytmusic')


@dataclass
class PlayerConfig:
    """
    Audio player discovery settings

    The preferred player, when set, is probed before the platform's
    built-in candidate list.
    """
    preferred: str = ""
    probe_timeout: int = 5


@dataclass
class SearchConfig:
    """
    Search provider configuration

    'youtube' uses the YouTube Data API v3 and needs an API key;
    'ytmusic' uses unauthenticated YouTube Music search.
    """
    provider: str = "youtube"
    api_key: str = ""
    default_limit: int = 10
    play_results: int = 5
    add_limit: int = 5
    request_timeout: int = 30


@dataclass
class StreamConfig:
    """yt-dlp options used when resolving audio stream URLs"""
    socket_timeout: int = 30
    quiet: bool = True


@dataclass
class PlaylistsConfig:
    """Location of the persisted playlist collection"""
    storage_path: str = "~/.awraris/playlists.json"


@dataclass
class LoggingConfig:
    """
    Logging configuration and output settings

    Controls application logging behavior including log levels, file output,
    rotation, and console formatting.
    """
    level: str = "INFO"
    file: str = ""
    max_size: str = "10MB"
    backup_count: int = 3
    console_output: bool = True
    colored_output: bool = True


@dataclass
class SecurityConfig:
    """Storage locations for configuration and user data"""
    config_directory: str = "~/.awraris/"


class Settings:
    """
    Main settings class that manages all configuration

    This class serves as the central configuration manager, loading settings
    from multiple sources (YAML files, environment variables) and providing
    a unified interface for accessing configuration throughout the application.

    The class handles:
    - Loading configuration from YAML files
    - Overriding with environment variables
    - Creating the configuration directory
    - Validating configuration values
    - Saving configuration back to files
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize settings from config file or environment variables

        Args:
            config_path: Path to custom config file, if None uses default locations
        """
        self.config_path = config_path
        self.config_dir = Path.home() / ".awraris"

        self.player = PlayerConfig()
        self.search = SearchConfig()
        self.stream = StreamConfig()
        self.playlists = PlaylistsConfig()
        self.logging = LoggingConfig()
        self.security = SecurityConfig()

        # Load configuration from various sources in order of precedence
        self._load_config()
        self._load_environment_variables()
        self._create_directories()

    def _sections(self) -> Dict[str, Any]:
        return {
            'player': self.player,
            'search': self.search,
            'stream': self.stream,
            'playlists': self.playlists,
            'logging': self.logging,
            'security': self.security,
        }

    def _load_config(self) -> None:
        """
        Load configuration from YAML file

        Searches for configuration files in multiple locations in order of
        precedence. The first file found will be used.
        """
        config_paths = [
            self.config_path,
            self.config_dir / "config.yaml",
            Path("config/config.yaml"),
            Path("config.yaml")
        ]

        config_data = {}
        for path in config_paths:
            if path and Path(path).exists():
                try:
                    with open(path, 'r', encoding='utf-8') as f:
                        config_data = yaml.safe_load(f) or {}
                    break
                except Exception as e:
                    print(f"Warning: Failed to load config from {path}: {e}")

        self._apply_config(config_data)

    def _apply_config(self, config_data: Dict[str, Any]) -> None:
        """
        Apply configuration data to dataclass instances

        Only attributes that exist on both sides are copied; unknown
        sections and keys are ignored.

        Args:
            config_data: Dictionary containing configuration sections
        """
        config_mapping = self._sections()

        for section_name, section_data in config_data.items():
            if section_name in config_mapping and isinstance(section_data, dict):
                config_obj = config_mapping[section_name]
                for key, value in section_data.items():
                    if hasattr(config_obj, key):
                        setattr(config_obj, key, value)

    def _load_environment_variables(self) -> None:
        """
        Load sensitive and per-invocation configuration from environment variables

        Environment variables take precedence over file-based configuration.
        """
        env_mappings = {
            'YOUTUBE_API_KEY': lambda v: setattr(self.search, 'api_key', v),
            'AWRARIS_SEARCH_PROVIDER': lambda v: setattr(self.search, 'provider', v),
            'AWRARIS_PLAYER': lambda v: setattr(self.player, 'preferred', v),
            'AWRARIS_PLAYLISTS_FILE': lambda v: setattr(self.playlists, 'storage_path', v),
            'AWRARIS_LOG_LEVEL': lambda v: setattr(self.logging, 'level', v),
        }

        for env_var, setter in env_mappings.items():
            value = os.getenv(env_var)
            if value:
                setter(value)

    def _create_directories(self) -> None:
        """
        Create the configuration directory if necessary

        Permission errors are reported as warnings; the playlist store
        creates its own directory again on first write.
        """
        directory = Path(self.security.config_directory).expanduser()
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except Exception as e:
            print(f"Warning: Failed to create directory {directory}: {e}")

    def get_config_directory(self) -> Path:
        """Get the expanded config directory path"""
        return Path(self.security.config_directory).expanduser()

    def get_playlists_path(self) -> Path:
        """
        Get the expanded playlists file path

        Returns:
            Path object for the JSON playlist collection
        """
        return Path(self.playlists.storage_path).expanduser()

    def save_config(self, path: Optional[str] = None) -> None:
        """
        Save current configuration to file

        Serializes the current configuration to a YAML file, excluding
        the API key.

        Args:
            path: Custom path to save config, defaults to user config directory

        Raises:
            Exception: If the configuration cannot be saved
        """
        if not path:
            path = self.get_config_directory() / "config.yaml"
        else:
            path = Path(path)

        config_data = {
            name: self._dataclass_to_dict(section)
            for name, section in self._sections().items()
        }

        # Never persist credentials
        config_data['search']['api_key'] = ""

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                yaml.dump(config_data, f, default_flow_style=False, indent=2)
        except Exception as e:
            raise Exception(f"Failed to save config to {path}: {e}")

    def _dataclass_to_dict(self, obj) -> Dict[str, Any]:
        """Convert dataclass to dictionary for YAML output"""
        result = {}
        for key, value in obj.__dict__.items():
            result[key] = value
        return result

    def validate(self) -> bool:
        """
        Validate current configuration

        Returns:
            True if configuration is valid, False otherwise
        """
        errors = []

        if self.search.provider not in SEARCH_PROVIDERS:
            errors.append(f"Invalid search provider: {self.search.provider}")

        if self.search.provider == 'youtube' and not self.search.api_key:
            errors.append("YOUTUBE_API_KEY is required for the 'youtube' search provider")

        for name in ('default_limit', 'play_results', 'add_limit'):
            value = getattr(self.search, name)
            if not isinstance(value, int) or value < 1 or value > 50:
                errors.append(f"Invalid search.{name}: {value} (must be 1-50)")

        if self.logging.level.upper() not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            errors.append(f"Invalid logging level: {self.logging.level}")

        if errors:
            print("Configuration validation errors:")
            for error in errors:
                print(f"  - {error}")
            return False

        return True

    def __str__(self) -> str:
        sections = [
            f"Search: {self.search.provider}",
            f"Player: {self.player.preferred or 'auto'}",
            f"Playlists: {self.playlists.storage_path}",
        ]
        return f"Settings({', '.join(sections)})"


# Global settings instance for singleton pattern
settings = Settings()


def get_settings() -> Settings:
    """
    Get the global settings instance

    Returns:
        The global Settings instance
    """
    return settings


def reload_settings(config_path: Optional[str] = None) -> Settings:
    """
    Reload settings from configuration files

    Creates a new settings instance with updated configuration from files
    and environment variables.

    Args:
        config_path: Optional path to specific config file

    Returns:
        New Settings instance with reloaded configuration
    """
    global settings
    settings = Settings(config_path)
    return settings
