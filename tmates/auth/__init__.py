"""
Authentication for Tmates CLI.

Passwordless (one-time passcode) sign-in against the Tmates identity
provider, with an optional on-disk session cache.
"""

from .session import Session, SessionHolder
from .store import SessionStore
from .client import AuthError, OtpClient, OtpClientConfig
from .manager import AuthManager

__all__ = [
    "Session",
    "SessionHolder",
    "SessionStore",
    "AuthError",
    "OtpClient",
    "OtpClientConfig",
    "AuthManager",
]
