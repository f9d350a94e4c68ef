"""
Session record and in-memory holder.

The holder is the single owner of the current session. It is created by
the app and handed to the AuthManager (writes) and to the API client via
a token getter (reads); there is no module-level session.
"""

import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Session:
    """Credential bundle issued by the identity provider."""
    access_token: str
    refresh_token: str
    expires_at: Optional[int] = None  # Unix seconds
    token_type: str = "bearer"
    user: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> Optional["Session"]:
        """
        Build a session from a provider response or stored record.

        Returns None if either token is missing.
        """
        if not isinstance(data, dict):
            return None
        access_token = data.get("access_token")
        refresh_token = data.get("refresh_token")
        if not access_token or not refresh_token:
            return None

        expires_at = data.get("expires_at")
        if expires_at is None and data.get("expires_in") is not None:
            expires_at = int(time.time()) + int(data["expires_in"])

        user = data.get("user")
        return cls(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=int(expires_at) if expires_at is not None else None,
            token_type=data.get("token_type") or "bearer",
            user=user if isinstance(user, dict) else {},
        )

    def to_dict(self) -> dict:
        data = {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "token_type": self.token_type,
            "user": self.user,
        }
        if self.expires_at is not None:
            data["expires_at"] = self.expires_at
        return data

    @property
    def email(self) -> Optional[str]:
        return self.user.get("email") or None

    @property
    def user_id(self) -> Optional[str]:
        return self.user.get("id") or None

    def expires_within(self, seconds: float, now: float = None) -> bool:
        """Check whether the access token expires within the given window."""
        if self.expires_at is None:
            return False
        now = time.time() if now is None else now
        return self.expires_at - now <= seconds


class SessionHolder:
    """Holds the current session for one CLI process."""

    def __init__(self, session: Optional[Session] = None):
        self._session = session

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def access_token(self) -> Optional[str]:
        return self._session.access_token if self._session else None

    def set(self, session: Optional[Session]):
        self._session = session

    def clear(self):
        self._session = None
