"""
Configuration management for Tmates CLI.

Config sources (highest precedence first):
- <config>/settings.json: persisted overrides (see `tmates config`)
- Environment variables, optionally loaded from .env.local / .env
"""

from .settings import PersistedSettings
from .app_config import (
    AppConfig,
    resolve_app_config,
    load_environment,
    normalize_url,
    DISABLE_CACHE_VAR,
)

__all__ = [
    "PersistedSettings",
    "AppConfig",
    "resolve_app_config",
    "load_environment",
    "normalize_url",
    "DISABLE_CACHE_VAR",
]
