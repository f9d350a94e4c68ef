"""
Core utilities for Tmates CLI.

Shared paths, file operations, logging, and formatting.
"""

from .paths import (
    get_certifi_ssl_context,
    get_bundle_dir,
    get_config_dir,
    get_sessions_dir,
    get_session_file_path,
    get_settings_path,
    get_logs_dir,
)

from .files import (
    read_json,
    write_private_json,
    delete_file,
)

from .formatting import (
    format_datetime,
    truncate,
    humanize_key,
)

from .logging import debug_log, is_debug_enabled, init_log_file

__all__ = [
    # Paths
    "get_certifi_ssl_context",
    "get_bundle_dir",
    "get_config_dir",
    "get_sessions_dir",
    "get_session_file_path",
    "get_settings_path",
    "get_logs_dir",
    # Files
    "read_json",
    "write_private_json",
    "delete_file",
    # Formatting
    "format_datetime",
    "truncate",
    "humanize_key",
    # Logging
    "debug_log",
    "is_debug_enabled",
    "init_log_file",
]
