"""
Exception classes for Awraris.

This module defines the custom exceptions used throughout the application.
Each exception carries a message meant for the user and an optional details
dictionary meant for the log file.

Exception Hierarchy:
    AwrarisError (base)
        ConfigError - Configuration file issues
        SearchError - Search provider issues (missing key, quota, API errors)
        StreamResolutionError - yt-dlp could not produce a playable URL
        PlaylistStoreError - Playlist file issues
            PlaylistNotFoundError - No playlist matches the given id or name
            TrackIndexError - Track position outside the playlist
        NoPlayerError - No usable audio player on this system

Per-track failures during playback are NOT raised through this hierarchy;
the playback engine turns them into result values (see playback.models).
Only NoPlayerError escapes a playback sequence.
"""

from enum import Enum
from typing import Optional


class AwrarisError(Exception):
    """
    Base exception for all Awraris errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (track id, path, status code).
    """

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(AwrarisError):
    """
    Raised when the configuration file cannot be read or contains invalid values.

    Example:
        raise ConfigError(
            "Invalid search provider 'bing'",
            details={'file_path': '~/.awraris/config.yaml'}
        )
    """
    pass


class SearchError(AwrarisError):
    """
    Raised when the search provider cannot answer a query.

    Attributes:
        is_auth_error: True when no credential is configured or it was rejected.
        is_quota_error: True when the provider refused the request for quota reasons.
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None,
        is_auth_error: bool = False,
        is_quota_error: bool = False
    ) -> None:
        super().__init__(message, details)
        self.is_auth_error = is_auth_error
        self.is_quota_error = is_quota_error


class StreamErrorKind(Enum):
    """Classification of stream resolution failures"""
    SIGN_IN_REQUIRED = "sign_in_required"
    UNAVAILABLE = "unavailable"
    PRIVATE = "private"
    EXTRACTION_FAILED = "extraction_failed"
    NO_AUDIO_FORMAT = "no_audio_format"
    GENERIC = "generic"


class StreamResolutionError(AwrarisError):
    """
    Raised when a track id cannot be turned into a playable audio URL.

    The message is shown to the user verbatim. Callers never retry.

    Attributes:
        kind: StreamErrorKind describing why extraction failed.
    """

    def __init__(
        self,
        message: str,
        kind: StreamErrorKind = StreamErrorKind.GENERIC,
        details: Optional[dict] = None
    ) -> None:
        super().__init__(message, details)
        self.kind = kind


class PlaylistStoreError(AwrarisError):
    """
    Raised when the playlists file cannot be read or written.

    Common causes:
        - playlists.json contains invalid JSON
        - Permission denied on the config directory
    """
    pass


class PlaylistNotFoundError(PlaylistStoreError):
    """Raised when no playlist matches the given id or name."""
    pass


class TrackIndexError(PlaylistStoreError):
    """Raised when a track position is outside the playlist."""
    pass


class NoPlayerError(AwrarisError):
    """
    Raised when no audio player could be discovered.

    This is the only failure that aborts a whole playback sequence.
    """

    def __init__(self, message: str = "No audio player found", details: Optional[dict] = None) -> None:
        super().__init__(message, details)
