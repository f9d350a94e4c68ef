"""
Logging utilities for Tmates CLI.

The debug channel never writes to stdout: stdout belongs to the toolbar.
Lines go to stderr when DEBUG contains "tmates-cli", and to the daily log
file once init_log_file() has been called.
"""

import os
import sys
from datetime import datetime
from pathlib import Path

DEBUG_NAMESPACE = "tmates-cli"
LOG_FILE_MODE = 0o600


def is_debug_enabled() -> bool:
    """Check whether DEBUG lists the tmates-cli namespace."""
    entries = os.environ.get("DEBUG", "").split(",")
    return any(entry.strip() == DEBUG_NAMESPACE for entry in entries)


class DebugLog:
    """Append-only debug log file with a session header."""

    def __init__(self, log_path: Path, version: str = None):
        self.path = log_path
        fd = os.open(log_path, os.O_WRONLY | os.O_CREAT | os.O_APPEND, LOG_FILE_MODE)
        self.log_file = os.fdopen(fd, "a", encoding="utf-8")
        # O_CREAT mode only applies to new files
        os.chmod(log_path, LOG_FILE_MODE)
        # Write session header with version
        self.log_file.write(f"\n{'='*60}\n")
        version_str = f" v{version}" if version else ""
        self.log_file.write(f"Session started: {datetime.now().isoformat()}{version_str}\n")
        self.log_file.write(f"{'='*60}\n\n")
        self.log_file.flush()

    def write(self, message: str):
        timestamp = datetime.now().strftime("[%H:%M:%S]")
        self.log_file.write(f"{timestamp} {message}\n")
        self.log_file.flush()

    def close(self):
        self.log_file.close()


_log: DebugLog | None = None


def init_log_file(logs_dir: Path, version: str = None) -> DebugLog:
    """Open today's log file (logs_dir/YYYY-MM-DD.log) for debug_log()."""
    global _log
    close_log_file()
    log_path = logs_dir / f"{datetime.now().strftime('%Y-%m-%d')}.log"
    _log = DebugLog(log_path, version=version)
    return _log


def close_log_file():
    global _log
    if _log is not None:
        _log.close()
        _log = None


def debug_log(message: str):
    """Log a debug message (stderr when enabled, log file when open)."""
    if is_debug_enabled():
        try:
            sys.stderr.write(f"[{DEBUG_NAMESPACE}] {message}\n")
            sys.stderr.flush()
        except OSError:
            pass
    if _log is not None:
        try:
            _log.write(message)
        except (OSError, ValueError):
            pass
