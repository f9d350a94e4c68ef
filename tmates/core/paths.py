"""
Centralized path management for Tmates CLI.

All user data lives in a single config directory, resolved in this order:
    1. $TMATES_CLI_HOME (explicit override, "~" expanded)
    2. $XDG_CONFIG_HOME/tmates-cli
    3. ~/.config/tmates-cli

Directory structure:
    <config>/
        settings.json         - Persisted overrides (API URL, provider URL/key)
        sessions/default.json - Cached identity-provider session
        logs/                 - Debug logs (one file per day)

Directories are created owner-only (0700).
"""

import os
import sys
from pathlib import Path

import certifi

CONFIG_DIR_NAME = "tmates-cli"
DIR_MODE = 0o700


def get_certifi_ssl_context() -> str:
    """Get path to certifi CA bundle, handling PyInstaller bundles."""
    if getattr(sys, "frozen", False):
        # PyInstaller bundles certifi's cacert.pem
        return str(Path(sys._MEIPASS) / "certifi" / "cacert.pem")
    return certifi.where()


def get_bundle_dir() -> Path:
    """
    Get the directory where bundled resources are located.

    For PyInstaller builds, bundled files are extracted to a temp directory.
    For development, this is the repo root.
    """
    if getattr(sys, "frozen", False):
        return Path(sys._MEIPASS)
    return Path(__file__).parent.parent.parent


def expand_tilde(value: str) -> Path:
    """Expand a leading ~ to the user's home directory."""
    if not value.startswith("~"):
        return Path(value)
    home = Path.home()
    if value == "~":
        return home
    return home / value[2:]


def ensure_directory(path: Path) -> Path:
    """Create a directory (and parents) with owner-only permissions."""
    if not path.exists():
        path.mkdir(parents=True, mode=DIR_MODE, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """
    Get the config directory, creating it if needed.

    Raises:
        RuntimeError: If no home directory can be determined for the default location
    """
    explicit = os.environ.get("TMATES_CLI_HOME", "").strip()
    if explicit:
        return ensure_directory(expand_tilde(explicit))

    xdg_home = os.environ.get("XDG_CONFIG_HOME", "").strip()
    if xdg_home:
        return ensure_directory(expand_tilde(xdg_home) / CONFIG_DIR_NAME)

    try:
        home = Path.home()
    except RuntimeError:
        raise RuntimeError("Unable to determine home directory for storing Tmates CLI data.")
    return ensure_directory(home / ".config" / CONFIG_DIR_NAME)


def get_sessions_dir() -> Path:
    """Get the directory holding cached sessions."""
    return ensure_directory(get_config_dir() / "sessions")


def get_session_file_path() -> Path:
    """Get path to the cached session file."""
    return get_sessions_dir() / "default.json"


def get_settings_path() -> Path:
    """Get path to persisted settings file."""
    return get_config_dir() / "settings.json"


def get_logs_dir() -> Path:
    """Get the debug log directory."""
    return ensure_directory(get_config_dir() / "logs")
