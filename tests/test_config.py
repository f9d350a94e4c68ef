"""
Tests for persisted settings, configuration resolution and config paths.
"""

import json
import os
import stat
from pathlib import Path

import pytest

from tmates.config import PersistedSettings, load_environment, resolve_app_config
from tmates.config.app_config import DISABLE_CACHE_VAR, coalesce, normalize_url
from tmates.core.paths import (
    expand_tilde,
    get_config_dir,
    get_session_file_path,
    get_settings_path,
)


@pytest.fixture
def settings_path(tmp_path) -> Path:
    return tmp_path / "settings.json"


class TestPersistedSettings:
    """Settings file load/save."""

    def test_missing_file_is_empty(self, settings_path):
        settings = PersistedSettings.load(settings_path)
        assert settings.custom_api_base_url == ""
        assert settings.to_dict() == {}

    def test_save_and_load(self, settings_path):
        settings = PersistedSettings(settings_path)
        settings.update(custom_api_base_url="https://api.example.com", custom_supabase_anon_key="anon")
        settings.save()

        assert json.loads(settings_path.read_text()) == {
            "customApiBaseUrl": "https://api.example.com",
            "customSupabaseAnonKey": "anon",
        }
        loaded = PersistedSettings.load(settings_path)
        assert loaded.custom_api_base_url == "https://api.example.com"
        assert loaded.custom_supabase_anon_key == "anon"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_saved_owner_only(self, settings_path):
        PersistedSettings(settings_path).save()
        assert stat.S_IMODE(settings_path.stat().st_mode) == 0o600

    def test_non_string_values_ignored(self, settings_path):
        settings_path.write_text(json.dumps({"customApiBaseUrl": 42, "customSupabaseUrl": "https://s"}))
        settings = PersistedSettings.load(settings_path)
        assert settings.custom_api_base_url == ""
        assert settings.custom_supabase_url == "https://s"

    def test_invalid_json_raises(self, settings_path):
        settings_path.write_text("{oops")
        with pytest.raises(ValueError):
            PersistedSettings.load(settings_path)

    def test_update_reports_changes(self, settings_path):
        settings = PersistedSettings(settings_path)
        assert settings.update(custom_supabase_url=" https://s ")
        assert settings.custom_supabase_url == "https://s"
        assert not settings.update(custom_supabase_url="https://s", custom_api_base_url=None)
        assert settings.update(custom_supabase_url="")
        assert settings.custom_supabase_url == ""

    def test_update_rejects_unknown_field(self, settings_path):
        with pytest.raises(KeyError):
            PersistedSettings(settings_path).update(theme="dark")

    def test_reset(self, settings_path):
        settings = PersistedSettings(settings_path)
        settings.update(custom_api_base_url="https://a", custom_supabase_url="https://s")
        settings.reset()
        assert settings.to_dict() == {}


class TestResolveAppConfig:
    """Precedence, normalisation and warnings."""

    def test_overrides_win_over_environment(self, settings_path):
        settings = PersistedSettings(settings_path)
        settings.update(custom_api_base_url="https://custom.example.com/")
        env = {
            "TMATES_API_BASE_URL": "https://env.example.com",
            "TMATES_SUPABASE_URL": "https://proj.supabase.co/",
            "TMATES_SUPABASE_ANON_KEY": " anon ",
        }

        config = resolve_app_config(settings, env)

        assert config.api_base_url == "https://custom.example.com"
        assert config.supabase_url == "https://proj.supabase.co"
        assert config.supabase_anon_key == "anon"
        assert config.warnings == []
        assert config.session_cache_enabled

    def test_fallback_variable_names(self, settings_path):
        env = {
            "EXPO_PUBLIC_API_URL": "https://expo.example.com",
            "SUPABASE_URL": "https://s",
            "EXPO_PUBLIC_SUPABASE_ANON_KEY": "k",
            "TMATES_API_BASE_URL": "   ",
        }
        config = resolve_app_config(PersistedSettings(settings_path), env)

        assert config.api_base_url == "https://expo.example.com"
        assert config.supabase_url == "https://s"
        assert config.supabase_anon_key == "k"

    def test_missing_values_warn(self, settings_path):
        config = resolve_app_config(PersistedSettings(settings_path), {})

        assert len(config.warnings) == 2
        assert "Supabase credentials are not fully configured" in config.warnings[0]
        assert "API base URL is not configured" in config.warnings[1]

    def test_cache_disabled(self, settings_path):
        config = resolve_app_config(PersistedSettings(settings_path), {DISABLE_CACHE_VAR: "1"})
        assert not config.session_cache_enabled

    @pytest.mark.parametrize("value,expected", [
        (None, ""),
        ("", ""),
        (" https://a.com/ ", "https://a.com"),
        ("https://a.com//", "https://a.com/"),
        ("https://a.com", "https://a.com"),
    ])
    def test_normalize_url(self, value, expected):
        assert normalize_url(value) == expected

    def test_coalesce(self):
        assert coalesce(None, " ", " b ", "c") == "b"
        assert coalesce(None, "") == ""


class TestLoadEnvironment:

    def test_env_files_do_not_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TMATES_API_BASE_URL", "https://from-shell")
        for name in ("TMATES_SUPABASE_URL", "TMATES_SUPABASE_ANON_KEY"):
            # set then delete so the values loaded below are undone too
            monkeypatch.setenv(name, "")
            monkeypatch.delenv(name)
        (tmp_path / ".env.local").write_text("TMATES_SUPABASE_URL=https://local\n")
        (tmp_path / ".env").write_text(
            "TMATES_SUPABASE_URL=https://dotenv\n"
            "TMATES_API_BASE_URL=https://dotenv-api\n"
            "TMATES_SUPABASE_ANON_KEY=dotenv-key\n"
        )

        load_environment(tmp_path)

        assert os.environ["TMATES_API_BASE_URL"] == "https://from-shell"
        assert os.environ["TMATES_SUPABASE_URL"] == "https://local"
        assert os.environ["TMATES_SUPABASE_ANON_KEY"] == "dotenv-key"


class TestPaths:
    """Config directory resolution."""

    def test_explicit_home(self, isolated_home):
        assert get_config_dir() == isolated_home
        assert isolated_home.is_dir()
        assert get_settings_path() == isolated_home / "settings.json"
        assert get_session_file_path() == isolated_home / "sessions" / "default.json"

    def test_xdg_config_home(self, tmp_path, monkeypatch):
        monkeypatch.delenv("TMATES_CLI_HOME")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        assert get_config_dir() == tmp_path / "xdg" / "tmates-cli"

    def test_default_location(self, tmp_path, monkeypatch):
        monkeypatch.delenv("TMATES_CLI_HOME")
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_config_dir() == tmp_path / ".config" / "tmates-cli"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_directory_owner_only(self, isolated_home):
        get_config_dir()
        assert stat.S_IMODE(isolated_home.stat().st_mode) == 0o700

    def test_expand_tilde(self, tmp_path, monkeypatch):
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert expand_tilde("~") == tmp_path
        assert expand_tilde("~/data") == tmp_path / "data"
        assert expand_tilde("/abs/path") == Path("/abs/path")
