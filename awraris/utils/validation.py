"""
Input validation utilities
"""
from typing import Optional, Tuple


MAX_RESULT_LIMIT = 50


def clamp_result_limit(value: Optional[str], default: int = 5) -> int:
    """
    Turn free-form user input into a search result count

    Empty or non-numeric input falls back to the default; numbers are
    clamped to 1..50 (the YouTube Data API maximum).

    Args:
        value: Raw user input
        default: Count used when the input is empty or not a number

    Returns:
        Result count between 1 and 50
    """
    try:
        limit = int(str(value).strip()) if value not in (None, "") else default
    except ValueError:
        limit = default
    if limit == 0:
        limit = default
    return max(1, min(MAX_RESULT_LIMIT, limit))


def validate_playlist_name(name: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a playlist name

    Args:
        name: Name to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not name or not name.strip():
        return False, "Playlist name cannot be empty"

    if len(name) > 200:
        return False, "Playlist name is too long (max 200 characters)"

    return True, None


def parse_track_number(value: str, track_count: int) -> Optional[int]:
    """
    Convert a 1-based track number typed by the user into a 0-based index

    Args:
        value: Raw user input
        track_count: Number of tracks in the playlist

    Returns:
        Zero-based index, or None if the input is not a valid track number
    """
    try:
        number = int(str(value).strip())
    except (ValueError, TypeError):
        return None

    index = number - 1
    if index < 0 or index >= track_count:
        return None
    return index


def parse_start_index(value: Optional[str], track_count: int) -> int:
    """
    Convert the optional "start at track" answer into a 0-based index

    Empty input starts at the first track. Numbers below 1 start at the first
    track; anything past the end yields an index equal to track_count, which
    plays nothing.

    Args:
        value: Raw user input
        track_count: Number of tracks in the playlist

    Returns:
        Zero-based start index
    """
    if value is None or not str(value).strip():
        return 0
    try:
        number = int(str(value).strip())
    except ValueError:
        return 0
    return min(max(0, number - 1), track_count)
