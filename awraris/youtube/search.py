"""
YouTube search providers

Two interchangeable providers return the same ranked `VideoResult` list:

- YouTubeDataSearcher: YouTube Data API v3 over HTTP (requests). Restricted to
  the Music video category and ordered by relevance. Needs YOUTUBE_API_KEY.
- YTMusicSearcher: unauthenticated YouTube Music search through ytmusicapi,
  restricted to songs. Needs no credential.

The active provider is chosen by `search.provider` in the settings and shared
through `get_searcher()`.
"""

from typing import List, Dict, Any, Optional
import requests
from ytmusicapi import YTMusic

from ..config.settings import get_settings
from ..exceptions import SearchError
from ..utils.logger import get_logger
from ..utils.helpers import parse_duration_string, parse_iso8601_duration
from ..utils.validation import MAX_RESULT_LIMIT
from .models import VideoResult


YOUTUBE_API_BASE = "https://www.googleapis.com/youtube/v3"

# YouTube's "Music" video category
MUSIC_CATEGORY_ID = "10"


def _clamp_limit(limit: int) -> int:
    return max(1, min(MAX_RESULT_LIMIT, int(limit)))


class YouTubeDataSearcher:
    """
    Search through the YouTube Data API v3

    A search costs two requests: `search.list` for ids and snippets, then
    `videos.list` for durations (contentDetails).
    """

    def __init__(self, api_key: Optional[str] = None, session: Optional[requests.Session] = None):
        """
        Initialize the searcher

        Args:
            api_key: API key, defaults to the configured YOUTUBE_API_KEY
            session: HTTP session to use (injectable for tests)
        """
        self.settings = get_settings()
        self.logger = get_logger(__name__)
        self.api_key = api_key if api_key is not None else self.settings.search.api_key
        self.timeout = self.settings.search.request_timeout
        self.session = session or requests.Session()

    def _get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        params = dict(params, key=self.api_key)
        try:
            response = self.session.get(
                f"{YOUTUBE_API_BASE}/{endpoint}",
                params=params,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise SearchError(f"YouTube API error: {e}")

        if response.status_code == 403:
            raise SearchError(
                "YouTube API quota exceeded or invalid API key",
                details={'status_code': 403, 'endpoint': endpoint},
                is_quota_error=True
            )
        if response.status_code >= 400:
            message = self._error_message(response)
            raise SearchError(
                f"YouTube API error: {message}",
                details={'status_code': response.status_code, 'endpoint': endpoint},
                is_auth_error=response.status_code in (400, 401)
            )

        try:
            return response.json()
        except ValueError as e:
            raise SearchError(f"YouTube API error: invalid response ({e})")

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            return response.json()['error']['message']
        except (ValueError, KeyError, TypeError):
            return f"HTTP {response.status_code}"

    def search(self, query: str, limit: int = 10) -> List[VideoResult]:
        """
        Search music videos

        Args:
            query: Free-text query
            limit: Maximum number of results (clamped to 1-50)

        Returns:
            Ranked results, empty when nothing matched

        Raises:
            SearchError: Missing API key, quota/authorization failure or API error
        """
        if not self.api_key:
            raise SearchError(
                "YouTube API key not found. Please set YOUTUBE_API_KEY in your .env file",
                is_auth_error=True
            )

        data = self._get('search', {
            'part': 'snippet',
            'q': query,
            'type': 'video',
            'maxResults': _clamp_limit(limit),
            'videoCategoryId': MUSIC_CATEGORY_ID,
            'order': 'relevance',
        })

        items = data.get('items') or []
        video_ids = [
            item.get('id', {}).get('videoId')
            for item in items
            if isinstance(item.get('id', {}).get('videoId'), str)
        ]
        if not video_ids:
            return []

        details = self._get('videos', {
            'part': 'contentDetails',
            'id': ','.join(video_ids),
        })
        durations = {
            item.get('id'): item.get('contentDetails', {}).get('duration')
            for item in details.get('items') or []
        }

        results = []
        for item in items:
            video_id = item.get('id', {}).get('videoId')
            if not video_id:
                continue
            snippet = item.get('snippet') or {}
            thumbnails = snippet.get('thumbnails') or {}
            results.append(VideoResult(
                id=video_id,
                title=snippet.get('title') or "Unknown Title",
                channel_title=snippet.get('channelTitle') or "Unknown Channel",
                duration=parse_iso8601_duration(durations.get(video_id)),
                thumbnail=(thumbnails.get('medium') or {}).get('url', ""),
            ))

        self.logger.debug(f"YouTube search '{query}' returned {len(results)} results")
        return results


class YTMusicSearcher:
    """Search through YouTube Music (ytmusicapi), no credentials needed"""

    def __init__(self, client: Optional[YTMusic] = None):
        self.logger = get_logger(__name__)
        self._ytmusic = client

    @property
    def ytmusic(self) -> YTMusic:
        """YouTube Music client, created on first use"""
        if not self._ytmusic:
            try:
                self._ytmusic = YTMusic()
                self.logger.info("YouTube Music API initialized")
            except Exception as e:
                raise SearchError(f"YouTube Music initialization failed: {e}")
        return self._ytmusic

    def search(self, query: str, limit: int = 10) -> List[VideoResult]:
        """
        Search songs on YouTube Music

        Raises:
            SearchError: If the YouTube Music request fails
        """
        limit = _clamp_limit(limit)
        try:
            raw_results = self.ytmusic.search(query=query, filter='songs', limit=limit)
        except SearchError:
            raise
        except Exception as e:
            raise SearchError(f"YouTube Music error: {e}")

        results = []
        for raw in raw_results:
            video_id = raw.get('videoId')
            if not video_id:
                continue
            artists = raw.get('artists') or []
            thumbnails = raw.get('thumbnails') or []
            duration = raw.get('duration_seconds')
            if duration is None and raw.get('duration'):
                duration = parse_duration_string(raw['duration'])
            results.append(VideoResult(
                id=video_id,
                title=raw.get('title') or "Unknown Title",
                channel_title=artists[0].get('name', "Unknown Channel") if artists else "Unknown Channel",
                duration=duration,
                thumbnail=thumbnails[-1].get('url', "") if thumbnails else "",
            ))
            if len(results) >= limit:
                break

        self.logger.debug(f"YTMusic search '{query}' returned {len(results)} results")
        return results


_searcher_instance = None


def get_searcher():
    """
    Get the global searcher for the configured provider

    Returns:
        YouTubeDataSearcher or YTMusicSearcher
    """
    global _searcher_instance
    if not _searcher_instance:
        provider = get_settings().search.provider
        if provider == 'ytmusic':
            _searcher_instance = YTMusicSearcher()
        else:
            _searcher_instance = YouTubeDataSearcher()
    return _searcher_instance


def reset_searcher() -> None:
    """Forget the global searcher so the next access honours changed settings"""
    global _searcher_instance
    _searcher_instance = None
