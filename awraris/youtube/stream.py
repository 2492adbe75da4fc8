"""
Audio stream resolution using yt-dlp

Turns a YouTube video id into a direct, playable audio URL without downloading
anything. yt-dlp extracts the full format list; the resolver keeps audio-only
formats and picks the best one by quality, then by audio bitrate.

Failures are classified from yt-dlp's error text so the CLI can show a
targeted hint (for example the sign-in verification wall). The resolver
never retries; a failed track is skipped by the playback engine.
"""

from typing import Dict, Any, List, Optional
import yt_dlp

from ..config.settings import get_settings
from ..exceptions import StreamResolutionError, StreamErrorKind
from ..utils.logger import get_logger
from .models import StreamResult


WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


def select_audio_format(formats: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Pick the best audio-only format

    Audio-only means an audio codec and no video codec. Formats are ranked
    by yt-dlp's `quality` value, ties broken by average bitrate (`abr`).

    Args:
        formats: The `formats` list from yt-dlp's info dictionary

    Returns:
        Best format dictionary, or None if there is no audio-only format
    """
    audio_formats = [
        f for f in formats or []
        if f.get('acodec') not in (None, 'none')
        and f.get('vcodec') == 'none'
        and f.get('url')
    ]
    if not audio_formats:
        return None

    return max(
        audio_formats,
        key=lambda f: (f.get('quality') or 0, f.get('abr') or 0)
    )


def classify_stream_error(message: str) -> StreamResolutionError:
    """
    Map raw extraction error text to a classified, user-facing error

    Args:
        message: Error text from yt-dlp or from format selection

    Returns:
        StreamResolutionError with a kind and the message shown to the user
    """
    if "Could not extract functions" in message or "functions" in message:
        return StreamResolutionError(
            "YouTube stream extraction failed. This may be due to YouTube updates. "
            "Try updating yt-dlp or use a different video.",
            kind=StreamErrorKind.EXTRACTION_FAILED,
            details={'original_error': message}
        )
    if "Sign in to confirm" in message:
        return StreamResolutionError(
            "YouTube requires sign-in verification. Try using a VPN or different IP address.",
            kind=StreamErrorKind.SIGN_IN_REQUIRED,
            details={'original_error': message}
        )
    if "Video unavailable" in message:
        return StreamResolutionError(
            "This video is not available for streaming.",
            kind=StreamErrorKind.UNAVAILABLE,
            details={'original_error': message}
        )
    if "Private video" in message:
        return StreamResolutionError(
            "This is a private video and cannot be streamed.",
            kind=StreamErrorKind.PRIVATE,
            details={'original_error': message}
        )
    if "No audio-only formats found" in message:
        return StreamResolutionError(
            f"Stream extraction error: {message}",
            kind=StreamErrorKind.NO_AUDIO_FORMAT,
            details={'original_error': message}
        )
    return StreamResolutionError(
        f"Stream extraction error: {message}",
        kind=StreamErrorKind.GENERIC,
        details={'original_error': message}
    )


class StreamResolver:
    """Resolves YouTube video ids to direct audio stream URLs"""

    def __init__(self):
        self.settings = get_settings()
        self.logger = get_logger(__name__)

    def _get_ydl_options(self) -> Dict[str, Any]:
        """yt-dlp options for metadata-only extraction"""
        return {
            'quiet': self.settings.stream.quiet,
            'no_warnings': True,
            'noplaylist': True,
            'extract_flat': False,
            'skip_download': True,
            'socket_timeout': self.settings.stream.socket_timeout,
            'logtostderr': False,
            'consoletitle': False,
        }

    def _extract_info(self, video_id: str) -> Dict[str, Any]:
        with yt_dlp.YoutubeDL(self._get_ydl_options()) as ydl:
            return ydl.extract_info(WATCH_URL.format(video_id=video_id), download=False)

    def resolve(self, video_id: str) -> str:
        """
        Resolve a video id to a playable audio URL

        Args:
            video_id: YouTube video id

        Returns:
            Direct audio stream URL

        Raises:
            StreamResolutionError: If the URL cannot be obtained
        """
        try:
            info = self._extract_info(video_id)
            if not info or info.get('_type', 'video') != 'video':
                raise ValueError("Invalid video information received")

            best = select_audio_format(info.get('formats') or [])
            if best is None:
                raise ValueError("No audio-only formats found")

            self.logger.debug(
                f"Resolved {video_id}: format {best.get('format_id')} "
                f"({best.get('acodec')}, {best.get('abr')} kbps)"
            )
            return best['url']

        except Exception as e:
            # yt-dlp wraps most failures in DownloadError; classify by text
            self.logger.debug(f"Stream resolution failed for {video_id}: {e}")
            raise classify_stream_error(str(e)) from e

    def try_resolve(self, video_id: str) -> StreamResult:
        """
        Resolve a video id without raising

        Returns:
            StreamResult carrying either the URL or the classified error
        """
        try:
            return StreamResult(track_id=video_id, url=self.resolve(video_id))
        except StreamResolutionError as e:
            return StreamResult(track_id=video_id, error=e.message, error_kind=e.kind)


_resolver_instance: Optional[StreamResolver] = None


def get_stream_resolver() -> StreamResolver:
    """Get the global stream resolver instance"""
    global _resolver_instance
    if not _resolver_instance:
        _resolver_instance = StreamResolver()
    return _resolver_instance
