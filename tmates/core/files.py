"""
Private JSON file helpers.

Session and settings files hold credentials, so they are always written
owner-only (0600), whatever the process umask is.
"""

import json
import os
from pathlib import Path

FILE_MODE = 0o600


def read_json(path: Path):
    """
    Read a JSON document.

    Returns:
        Parsed data, or None if the file does not exist
    """
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return None


def write_private_json(path: Path, data) -> None:
    """Write a JSON document readable only by the owning user."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    # O_CREAT mode only applies to new files
    os.chmod(path, FILE_MODE)


def delete_file(path: Path) -> bool:
    """Delete a file if present. Returns True if something was removed."""
    try:
        path.unlink()
        return True
    except FileNotFoundError:
        return False
