"""
Session file persistence.

Stores the session at <config>/sessions/default.json as
{"session": {...}, "savedAt": "<iso timestamp>"}, owner-only.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..core.files import read_json, write_private_json, delete_file
from .session import Session


class SessionStore:
    """Load/save/delete the cached session file."""

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> Optional[Session]:
        """
        Load the cached session.

        Returns None if there is no file or it holds no usable session.
        """
        data = read_json(self.path)
        if not isinstance(data, dict):
            return None
        return Session.from_dict(data.get("session"))

    def save(self, session: Session):
        payload = {
            "session": session.to_dict(),
            "savedAt": datetime.now(timezone.utc).isoformat(),
        }
        write_private_json(self.path, payload)

    def delete(self) -> bool:
        return delete_file(self.path)

    @property
    def exists(self) -> bool:
        return self.path.exists()
