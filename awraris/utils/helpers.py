"""
Utility functions and helpers for Awraris
Common functions for duration formatting, timestamps, id generation and file handling
"""

import re
import time
from pathlib import Path
from typing import Optional, Union, Iterable
from datetime import datetime, timezone


BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

ISO8601_DURATION = re.compile(r'^PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?$')


def format_duration(seconds: Optional[Union[int, float]]) -> str:
    """
    Format duration in seconds to human-readable string

    Args:
        seconds: Duration in seconds, None when unknown

    Returns:
        Formatted duration string ("4:13", "1:02:03" or "Unknown")
    """
    if seconds is None:
        return "Unknown"
    if seconds < 0:
        return "0:00"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    else:
        return f"{minutes}:{secs:02d}"


def parse_duration_string(duration_str: str) -> Optional[int]:
    """
    Parse duration string to seconds

    Args:
        duration_str: Duration string (e.g., "3:45", "1:23:45")

    Returns:
        Duration in seconds or None if invalid
    """
    try:
        parts = duration_str.split(':')
        if len(parts) == 2:
            minutes, seconds = map(int, parts)
            return minutes * 60 + seconds
        elif len(parts) == 3:
            hours, minutes, seconds = map(int, parts)
            return hours * 3600 + minutes * 60 + seconds
        else:
            return None
    except (ValueError, AttributeError):
        return None


def parse_iso8601_duration(duration: Optional[str]) -> Optional[int]:
    """
    Parse an ISO 8601 video duration as returned by the YouTube Data API

    Args:
        duration: Duration like "PT4M13S" or "PT1H2M"

    Returns:
        Duration in seconds or None if the value is missing or malformed
    """
    if not duration:
        return None

    match = ISO8601_DURATION.match(duration.strip())
    if not match or not any(match.groups()):
        return None

    hours, minutes, seconds = (int(value or 0) for value in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def truncate_string(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate string to maximum length with suffix

    Args:
        text: Original text
        max_length: Maximum length including suffix
        suffix: Suffix to add when truncating

    Returns:
        Truncated string
    """
    if len(text) <= max_length:
        return text

    truncate_length = max_length - len(suffix)
    if truncate_length <= 0:
        return suffix[:max_length]

    return text[:truncate_length] + suffix


def to_base36(number: int) -> str:
    """Encode a non-negative integer in lowercase base 36"""
    if number < 0:
        raise ValueError("Cannot encode negative numbers")
    if number == 0:
        return "0"

    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return ''.join(reversed(digits))


def generate_playlist_id(existing_ids: Iterable[str] = ()) -> str:
    """
    Generate a short playlist id from the current time in milliseconds

    Args:
        existing_ids: Ids already in use; the result never collides with them

    Returns:
        Base 36 id string
    """
    taken = set(existing_ids)
    millis = int(time.time() * 1000)
    candidate = to_base36(millis)
    while candidate in taken:
        millis += 1
        candidate = to_base36(millis)
    return candidate


def get_current_timestamp() -> str:
    """Get current UTC timestamp in ISO format with millisecond precision"""
    now = datetime.now(timezone.utc)
    return now.strftime('%Y-%m-%dT%H:%M:%S.') + f"{now.microsecond // 1000:03d}Z"


def format_timestamp(timestamp: Union[str, datetime]) -> str:
    """
    Format timestamp for display

    Args:
        timestamp: Timestamp string or datetime object

    Returns:
        Formatted timestamp string
    """
    if isinstance(timestamp, str):
        try:
            dt = datetime.fromisoformat(timestamp.replace('Z', '+00:00'))
        except ValueError:
            return timestamp
    else:
        dt = timestamp

    return dt.strftime('%Y-%m-%d %H:%M:%S')


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure directory exists, create if necessary

    Args:
        path: Directory path

    Returns:
        Path object
    """
    path_obj = Path(path)
    path_obj.mkdir(parents=True, exist_ok=True)
    return path_obj
