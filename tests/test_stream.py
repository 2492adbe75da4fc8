"""Test yt-dlp stream resolution"""

from unittest.mock import patch

import pytest

from awraris.exceptions import StreamErrorKind, StreamResolutionError
from awraris.youtube.stream import StreamResolver, classify_stream_error, select_audio_format


FORMATS = [
    {'format_id': '18', 'acodec': 'mp4a.40.2', 'vcodec': 'avc1', 'url': 'https://v/18', 'quality': 5},
    {'format_id': '139', 'acodec': 'mp4a.40.5', 'vcodec': 'none', 'url': 'https://a/139', 'quality': 2, 'abr': 48},
    {'format_id': '140', 'acodec': 'mp4a.40.2', 'vcodec': 'none', 'url': 'https://a/140', 'quality': 3, 'abr': 129},
    {'format_id': '251', 'acodec': 'opus', 'vcodec': 'none', 'url': 'https://a/251', 'quality': 3, 'abr': 135},
    {'format_id': 'sb0', 'acodec': 'none', 'vcodec': 'none', 'url': 'https://sb/0'},
]


@pytest.fixture
def mock_ydl():
    """Patched yt_dlp.YoutubeDL context manager"""
    with patch('awraris.youtube.stream.yt_dlp.YoutubeDL') as ydl_class:
        yield ydl_class.return_value.__enter__.return_value


class TestFormatSelection:
    """Test audio-only format selection"""

    def test_picks_best_audio_only_format(self):
        assert select_audio_format(FORMATS)['format_id'] == '251'

    def test_ignores_formats_with_video(self):
        assert select_audio_format([FORMATS[0]]) is None

    def test_ignores_formats_without_url(self):
        assert select_audio_format([{'acodec': 'opus', 'vcodec': 'none'}]) is None

    def test_empty(self):
        assert select_audio_format([]) is None


class TestErrorClassification:
    """Test mapping of yt-dlp error text"""

    def test_sign_in(self):
        error = classify_stream_error("ERROR: [youtube] abc: Sign in to confirm you're not a bot")
        assert error.kind == StreamErrorKind.SIGN_IN_REQUIRED
        assert error.message == "YouTube requires sign-in verification. Try using a VPN or different IP address."

    def test_unavailable(self):
        error = classify_stream_error("ERROR: [youtube] abc: Video unavailable")
        assert error.kind == StreamErrorKind.UNAVAILABLE
        assert error.message == "This video is not available for streaming."

    def test_private(self):
        error = classify_stream_error("ERROR: [youtube] abc: Private video. Sign in if you've been granted access")
        assert error.kind == StreamErrorKind.PRIVATE

    def test_extraction(self):
        error = classify_stream_error("Could not extract functions")
        assert error.kind == StreamErrorKind.EXTRACTION_FAILED

    def test_generic(self):
        error = classify_stream_error("HTTP Error 500")
        assert error.kind == StreamErrorKind.GENERIC
        assert error.message == "Stream extraction error: HTTP Error 500"
        assert error.details['original_error'] == "HTTP Error 500"


class TestStreamResolver:
    """Test StreamResolver against a mocked yt-dlp"""

    def test_resolve(self, mock_ydl):
        mock_ydl.extract_info.return_value = {'_type': 'video', 'id': 'abc', 'formats': FORMATS}

        assert StreamResolver().resolve('abc') == 'https://a/251'
        mock_ydl.extract_info.assert_called_once_with(
            'https://www.youtube.com/watch?v=abc', download=False
        )

    def test_resolve_without_type_key(self, mock_ydl):
        mock_ydl.extract_info.return_value = {'id': 'abc', 'formats': FORMATS}
        assert StreamResolver().resolve('abc') == 'https://a/251'

    def test_playlist_info_is_rejected(self, mock_ydl):
        mock_ydl.extract_info.return_value = {'_type': 'playlist', 'entries': []}
        with pytest.raises(StreamResolutionError):
            StreamResolver().resolve('abc')

    def test_no_audio_formats(self, mock_ydl):
        mock_ydl.extract_info.return_value = {'_type': 'video', 'formats': [FORMATS[0]]}
        with pytest.raises(StreamResolutionError) as exc_info:
            StreamResolver().resolve('abc')
        assert exc_info.value.kind == StreamErrorKind.NO_AUDIO_FORMAT

    def test_try_resolve_success(self, mock_ydl):
        mock_ydl.extract_info.return_value = {'_type': 'video', 'formats': FORMATS}

        result = StreamResolver().try_resolve('abc')

        assert result.success
        assert result.url == 'https://a/251'
        assert result.error is None

    def test_try_resolve_never_raises(self, mock_ydl):
        mock_ydl.extract_info.side_effect = Exception("ERROR: [youtube] abc: Sign in to confirm you're not a bot")

        result = StreamResolver().try_resolve('abc')

        assert not result.success
        assert result.error_kind == StreamErrorKind.SIGN_IN_REQUIRED
        assert "sign-in" in result.error
