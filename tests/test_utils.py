# tests/test_utils.py
"""Test utilities and helpers"""

import re

from awraris.utils.helpers import (
    format_duration,
    format_timestamp,
    generate_playlist_id,
    get_current_timestamp,
    parse_duration_string,
    parse_iso8601_duration,
    to_base36,
    truncate_string,
)
from awraris.utils.logger import parse_size
from awraris.utils.validation import (
    clamp_result_limit,
    parse_start_index,
    parse_track_number,
    validate_playlist_name,
)


class TestHelpers:
    """Test helper functions"""

    def test_format_duration(self):
        """Test duration formatting"""
        assert format_duration(90) == "1:30"
        assert format_duration(3661) == "1:01:01"
        assert format_duration(0) == "0:00"
        assert format_duration(-10) == "0:00"
        assert format_duration(None) == "Unknown"

    def test_parse_duration_string(self):
        """Test duration string parsing"""
        assert parse_duration_string("3:45") == 225
        assert parse_duration_string("1:23:45") == 5025
        assert parse_duration_string("invalid") is None

    def test_parse_iso8601_duration(self):
        """Test YouTube Data API duration parsing"""
        assert parse_iso8601_duration("PT4M13S") == 253
        assert parse_iso8601_duration("PT1H") == 3600
        assert parse_iso8601_duration("PT45S") == 45
        assert parse_iso8601_duration("PT") is None
        assert parse_iso8601_duration("P1D") is None
        assert parse_iso8601_duration(None) is None

    def test_truncate_string(self):
        assert truncate_string("short", 10) == "short"
        assert truncate_string("a very long title", 10) == "a very ..."

    def test_to_base36(self):
        assert to_base36(0) == "0"
        assert to_base36(35) == "z"
        assert to_base36(36) == "10"

    def test_generate_playlist_id_avoids_collisions(self):
        first = generate_playlist_id()
        second = generate_playlist_id([first])
        assert first != second
        assert re.fullmatch(r'[0-9a-z]+', second)

    def test_timestamps(self):
        timestamp = get_current_timestamp()
        assert re.fullmatch(r'\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z', timestamp)
        assert format_timestamp("2024-05-01T10:01:00.000Z") == "2024-05-01 10:01:00"
        assert format_timestamp("not a date") == "not a date"

    def test_parse_size(self):
        assert parse_size("10MB") == 10 * 1024 * 1024
        assert parse_size("512KB") == 512 * 1024


class TestValidation:
    """Test user input validation"""

    def test_clamp_result_limit(self):
        assert clamp_result_limit("") == 5
        assert clamp_result_limit(None) == 5
        assert clamp_result_limit("abc") == 5
        assert clamp_result_limit("0") == 5
        assert clamp_result_limit("12") == 12
        assert clamp_result_limit("500") == 50
        assert clamp_result_limit("-3") == 1
        assert clamp_result_limit("", default=8) == 8

    def test_validate_playlist_name(self):
        assert validate_playlist_name("road-trip") == (True, None)
        assert validate_playlist_name("   ")[0] is False
        assert validate_playlist_name("x" * 201)[0] is False

    def test_parse_track_number(self):
        assert parse_track_number("1", 3) == 0
        assert parse_track_number(" 3 ", 3) == 2
        assert parse_track_number("4", 3) is None
        assert parse_track_number("0", 3) is None
        assert parse_track_number("two", 3) is None

    def test_parse_start_index(self):
        assert parse_start_index("", 3) == 0
        assert parse_start_index(None, 3) == 0
        assert parse_start_index("2", 3) == 1
        assert parse_start_index("0", 3) == 0
        assert parse_start_index("9", 3) == 3
