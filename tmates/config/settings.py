"""
Persisted settings for Tmates CLI.

Manages <config>/settings.json - optional endpoint overrides that take
precedence over environment variables.
"""

import json
from pathlib import Path

from ..core.files import read_json, write_private_json


class PersistedSettings:
    """
    Manages <config>/settings.json.

    Stores:
    - Custom API base URL
    - Custom identity-provider (Supabase) URL and anonymous key

    Keys are stored camelCase so the file stays compatible with other
    Tmates clients.
    """

    FIELDS = {
        "custom_api_base_url": "customApiBaseUrl",
        "custom_supabase_url": "customSupabaseUrl",
        "custom_supabase_anon_key": "customSupabaseAnonKey",
    }

    def __init__(self, path: Path):
        self.path = path
        self.custom_api_base_url: str = ""
        self.custom_supabase_url: str = ""
        self.custom_supabase_anon_key: str = ""

    @classmethod
    def load(cls, path: Path) -> "PersistedSettings":
        """
        Load settings from file.

        A missing file yields empty settings. Invalid JSON raises ValueError.
        """
        settings = cls(path)
        data = read_json(path)
        if not isinstance(data, dict):
            return settings

        for attr, key in cls.FIELDS.items():
            value = data.get(key)
            if isinstance(value, str):
                setattr(settings, attr, value)
        return settings

    def save(self):
        """Save settings to file (owner-only permissions)."""
        write_private_json(self.path, self.to_dict())

    def to_dict(self) -> dict:
        return {
            key: getattr(self, attr)
            for attr, key in self.FIELDS.items()
            if getattr(self, attr)
        }

    def update(self, **overrides) -> bool:
        """
        Apply non-None overrides. Empty strings clear a value.

        Returns True if anything changed.
        """
        changed = False
        for attr, value in overrides.items():
            if attr not in self.FIELDS:
                raise KeyError(attr)
            if value is None:
                continue
            value = value.strip()
            if getattr(self, attr) != value:
                setattr(self, attr, value)
                changed = True
        return changed

    def reset(self):
        """Clear every override."""
        for attr in self.FIELDS:
            setattr(self, attr, "")

    def __repr__(self) -> str:
        return f"PersistedSettings({json.dumps(self.to_dict())})"
