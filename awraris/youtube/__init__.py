"""
YouTube integration package

Search providers (YouTube Data API v3 and YouTube Music) and the yt-dlp
based stream resolver that turns a video id into a playable audio URL.
"""

from .models import VideoResult, StreamResult
from .search import get_searcher, reset_searcher, YouTubeDataSearcher, YTMusicSearcher
from .stream import get_stream_resolver, StreamResolver

__all__ = [
    # Data models
    'VideoResult',
    'StreamResult',

    # Search providers
    'get_searcher',
    'reset_searcher',
    'YouTubeDataSearcher',
    'YTMusicSearcher',

    # Stream resolution
    'get_stream_resolver',
    'StreamResolver'
]
