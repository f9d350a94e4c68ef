"""
Tests for the debug channel and plain-text formatting helpers.
"""

import os
import stat

import pytest

from tmates.core.formatting import format_datetime, humanize_key, truncate
from tmates.core.logging import close_log_file, debug_log, init_log_file, is_debug_enabled


class TestDebugChannel:

    @pytest.mark.parametrize("value,enabled", [
        ("", False),
        ("tmates-cli", True),
        ("express, tmates-cli", True),
        ("tmates", False),
        ("tmates-cli-extra", False),
    ])
    def test_debug_flag(self, monkeypatch, value, enabled):
        monkeypatch.setenv("DEBUG", value)
        assert is_debug_enabled() is enabled

    def test_stderr_only_when_enabled(self, monkeypatch, capsys):
        debug_log("quiet")
        assert capsys.readouterr().err == ""

        monkeypatch.setenv("DEBUG", "tmates-cli")
        debug_log("loud")
        captured = capsys.readouterr()
        assert captured.err == "[tmates-cli] loud\n"
        assert captured.out == ""

    def test_log_file(self, tmp_path):
        log = init_log_file(tmp_path, version="1.2.3")
        try:
            debug_log("Push -> Pinboard (depth 1)")
        finally:
            close_log_file()

        text = log.path.read_text()
        assert "Session started:" in text
        assert "v1.2.3" in text
        assert "Push -> Pinboard (depth 1)" in text

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_log_file_owner_only(self, tmp_path):
        log = init_log_file(tmp_path)
        close_log_file()
        assert stat.S_IMODE(log.path.stat().st_mode) == 0o600

    def test_closed_log_ignored(self, tmp_path):
        log = init_log_file(tmp_path)
        close_log_file()
        debug_log("after close")
        assert "after close" not in log.path.read_text()


class TestFormatting:

    def test_format_datetime_missing(self):
        assert format_datetime(None) == "Unknown"
        assert format_datetime("", fallback="Unknown date") == "Unknown date"

    def test_format_datetime_unparseable(self):
        assert format_datetime("yesterday") == "yesterday"

    def test_format_datetime_naive(self):
        assert format_datetime("2025-03-01T09:05:00") == "2025-03-01 09:05"

    def test_truncate(self):
        assert truncate("short", 10) == "short"
        assert truncate("abcdefghij", 5) == "abcd…"
        assert len(truncate("x" * 200, 120)) == 120

    def test_humanize_key(self):
        assert humanize_key("allow_notifications") == "allow notifications"
