"""
Identity-provider client for Tmates CLI.

Talks to the Supabase auth (GoTrue) REST endpoints for passwordless
email login: send code, verify code, refresh session, sign out.
"""

import requests
from dataclasses import dataclass
from typing import Optional

from ..core.logging import debug_log
from ..core.paths import get_certifi_ssl_context
from .session import Session


class AuthError(Exception):
    """Raised when the identity provider rejects or cannot serve a request."""
    pass


@dataclass
class OtpClientConfig:
    """Configuration for OtpClient."""
    supabase_url: str
    anon_key: str
    timeout: int = 30


class OtpClient:
    """
    Supabase auth REST client.

    Only handles HTTP; session bookkeeping lives in AuthManager.
    """

    CLIENT_HEADER = "tmates-cli"

    def __init__(self, config: OtpClientConfig, http: Optional[requests.Session] = None):
        self.config = config
        self._http = http or requests.Session()

    @property
    def is_configured(self) -> bool:
        return bool(self.config.supabase_url and self.config.anon_key)

    def _url(self, path: str) -> str:
        return f"{self.config.supabase_url.rstrip('/')}/auth/v1/{path.lstrip('/')}"

    def _get_headers(self, bearer: Optional[str] = None) -> dict:
        """Get request headers. Bearer defaults to the anonymous key."""
        return {
            "apikey": self.config.anon_key,
            "Authorization": f"Bearer {bearer or self.config.anon_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "x-tmates-client": self.CLIENT_HEADER,
        }

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Pull the provider's human-readable message out of an error response."""
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            for key in ("msg", "error_description", "message", "error"):
                if payload.get(key):
                    return str(payload[key])
        return response.reason or f"HTTP {response.status_code}"

    def _post(self, path: str, json_body: dict = None, params: dict = None,
              bearer: Optional[str] = None, action: str = "Request failed") -> dict:
        if not self.is_configured:
            raise AuthError(
                "Supabase credentials are not configured. Set TMATES_SUPABASE_URL and "
                "TMATES_SUPABASE_ANON_KEY or use `tmates config` to configure them."
            )

        try:
            response = self._http.post(
                self._url(path),
                json=json_body,
                params=params,
                headers=self._get_headers(bearer),
                timeout=self.config.timeout,
                verify=get_certifi_ssl_context(),
            )
        except requests.exceptions.RequestException as e:
            raise AuthError(f"{action}: {e}")

        debug_log(f"auth POST {path} -> {response.status_code}")
        if not response.ok:
            raise AuthError(f"{action}: {self._error_message(response)}")

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {}

    def send_otp(self, email: str):
        """Email a one-time passcode. Does not create new users."""
        self._post(
            "otp",
            json_body={"email": email, "create_user": False},
            action="Failed to send verification code",
        )

    def verify_otp(self, email: str, token: str) -> Session:
        """Exchange an emailed passcode for a session."""
        data = self._post(
            "verify",
            json_body={"type": "email", "email": email, "token": token},
            action="Verification failed",
        )
        session = Session.from_dict(data.get("session") if "session" in data else data)
        if session is None:
            raise AuthError("Verification succeeded but no session was returned.")
        return session

    def refresh(self, refresh_token: str) -> Session:
        """Trade a refresh token for a new session."""
        data = self._post(
            "token",
            params={"grant_type": "refresh_token"},
            json_body={"refresh_token": refresh_token},
            action="Failed to refresh session",
        )
        session = Session.from_dict(data)
        if session is None:
            raise AuthError("Failed to refresh session: no session was returned.")
        return session

    def sign_out(self, access_token: str):
        """Revoke the session on the provider."""
        self._post("logout", bearer=access_token, action="Failed to sign out")
