"""
Tmates CLI - terminal client for your AI teammates.

This package provides the login/session flow over the Tmates identity
provider and the interactive screen navigator on top of the Tmates API.

Import from submodules directly:
    from tmates.config import resolve_app_config
    from tmates.auth import AuthManager
    from tmates.api import ApiClient
    from tmates.ui import Toolbar
"""


def _get_version():
    """Read version from VERSION file, falling back to installed metadata."""
    from pathlib import Path
    from .core.paths import get_bundle_dir
    # Try relative to this file first (source), then bundle dir (PyInstaller)
    for base in [Path(__file__).parent.parent, get_bundle_dir()]:
        version_file = base / "VERSION"
        if version_file.exists():
            return version_file.read_text().strip()
    from importlib.metadata import PackageNotFoundError, version
    try:
        return version("tmates-cli")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()
