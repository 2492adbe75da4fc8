# awraris/utils/__init__.py
"""
Utilities package
Common helpers, logging, and validation functions
"""

from .logger import (
    get_logger,
    configure_from_settings,
    setup_logging,
    OperationLogger,
    create_operation_logger,
    get_current_log_file
)
from .helpers import (
    format_duration,
    parse_duration_string,
    parse_iso8601_duration,
    truncate_string,
    generate_playlist_id,
    get_current_timestamp,
    format_timestamp,
    ensure_directory
)
from .validation import (
    clamp_result_limit,
    validate_playlist_name,
    parse_track_number,
    parse_start_index
)

__all__ = [
    # Logger exports
    'get_logger',
    'configure_from_settings',
    'setup_logging',
    'OperationLogger',
    'create_operation_logger',
    'get_current_log_file',

    # Helper exports
    'format_duration',
    'parse_duration_string',
    'parse_iso8601_duration',
    'truncate_string',
    'generate_playlist_id',
    'get_current_timestamp',
    'format_timestamp',
    'ensure_directory',

    # Validation exports
    'clamp_result_limit',
    'validate_playlist_name',
    'parse_track_number',
    'parse_start_index'
]
