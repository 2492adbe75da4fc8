"""
Data models for YouTube search results and stream resolution outcomes
"""

from dataclasses import dataclass
from typing import Optional

from ..exceptions import StreamErrorKind
from ..playlists.models import Track
from ..utils.helpers import format_duration


@dataclass
class VideoResult:
    """
    One ranked search hit

    Attributes:
        id: YouTube video id
        title: Video title
        channel_title: Channel (or primary artist) name
        duration: Length in seconds, None when the provider did not report it
        thumbnail: Thumbnail URL, empty when missing
    """
    id: str
    title: str
    channel_title: str
    duration: Optional[int] = None
    thumbnail: str = ""

    @property
    def duration_str(self) -> str:
        return format_duration(self.duration)

    @property
    def web_url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.id}"

    def to_track(self, url: Optional[str] = None) -> Track:
        """Turn the hit into a queueable track, optionally with a resolved stream URL"""
        return Track(title=self.title, id=self.id, url=url)


@dataclass
class StreamResult:
    """
    Outcome of resolving a track id into a playable URL

    Exactly one of `url` and `error` is set.
    """
    track_id: str
    url: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[StreamErrorKind] = None

    @property
    def success(self) -> bool:
        return self.url is not None
