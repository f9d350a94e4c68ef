"""
Application configuration resolution.

Combines persisted overrides, .env files and environment variables into
an AppConfig. Missing values are reported as warnings rather than errors:
failures surface on the first API or auth call instead.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from ..core.logging import is_debug_enabled
from .settings import PersistedSettings

SUPABASE_URL_VARS = ("TMATES_SUPABASE_URL", "EXPO_PUBLIC_SUPABASE_URL", "SUPABASE_URL")
SUPABASE_KEY_VARS = ("TMATES_SUPABASE_ANON_KEY", "EXPO_PUBLIC_SUPABASE_ANON_KEY", "SUPABASE_ANON_KEY")
API_BASE_URL_VARS = ("TMATES_API_BASE_URL", "EXPO_PUBLIC_API_URL", "API_BASE_URL")
DISABLE_CACHE_VAR = "TMATES_CLI_DISABLE_SESSION_CACHE"

ENV_FILES = (".env.local", ".env")


@dataclass
class AppConfig:
    """Resolved configuration for one CLI run."""
    supabase_url: str = ""
    supabase_anon_key: str = ""
    api_base_url: str = ""
    session_cache_enabled: bool = True
    debug: bool = False
    warnings: list[str] = field(default_factory=list)


def normalize_url(value: str | None) -> str:
    """Trim whitespace and a single trailing slash."""
    if not value:
        return ""
    trimmed = value.strip()
    if trimmed.endswith("/"):
        trimmed = trimmed[:-1]
    return trimmed


def coalesce(*values: str | None) -> str:
    """Return the first non-blank value, trimmed."""
    for value in values:
        if value and value.strip():
            return value.strip()
    return ""


def load_environment(cwd: Path = None):
    """Load .env.local then .env from cwd without overriding the environment."""
    base = cwd or Path.cwd()
    for name in ENV_FILES:
        path = base / name
        if path.exists():
            load_dotenv(path, override=False)


def resolve_app_config(settings: PersistedSettings, env: dict = None) -> AppConfig:
    """
    Resolve configuration. Persisted overrides win over environment variables.

    Args:
        settings: Loaded persisted settings
        env: Environment mapping (defaults to os.environ)
    """
    env = os.environ if env is None else env

    supabase_url = normalize_url(coalesce(
        settings.custom_supabase_url,
        *(env.get(name) for name in SUPABASE_URL_VARS),
    ))
    supabase_anon_key = coalesce(
        settings.custom_supabase_anon_key,
        *(env.get(name) for name in SUPABASE_KEY_VARS),
    )
    api_base_url = normalize_url(coalesce(
        settings.custom_api_base_url,
        *(env.get(name) for name in API_BASE_URL_VARS),
    ))

    config = AppConfig(
        supabase_url=supabase_url,
        supabase_anon_key=supabase_anon_key,
        api_base_url=api_base_url,
        session_cache_enabled=env.get(DISABLE_CACHE_VAR) != "1",
        debug=is_debug_enabled(),
    )

    if not supabase_url or not supabase_anon_key:
        config.warnings.append(
            "Supabase credentials are not fully configured. Provide TMATES_SUPABASE_URL and "
            "TMATES_SUPABASE_ANON_KEY environment variables or set custom values with `tmates config`."
        )
    if not api_base_url:
        config.warnings.append(
            "API base URL is not configured. Provide TMATES_API_BASE_URL or configure a custom "
            "API endpoint with `tmates config`."
        )

    return config
