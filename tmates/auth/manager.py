"""
Authentication manager for Tmates CLI.

Provides a single interface for session lifecycle:
- Restore a cached session (refreshing it if expired)
- Passwordless sign-in (send code, verify code)
- Sign out

Every change is mirrored to the session file unless caching is disabled.
"""

import threading
from typing import Optional

from ..core.logging import debug_log
from .client import AuthError, OtpClient
from .session import Session, SessionHolder
from .store import SessionStore

# Refresh sessions this close to expiry instead of using them
EXPIRY_MARGIN_SECONDS = 60


class AuthManager:
    """
    Session/Auth bridge.

    Usage:
        auth = AuthManager(client, SessionHolder(), SessionStore(path))

        # API client reads the token lazily
        api = ApiClient(config, token_getter=auth.get_access_token)

        session = auth.get_active_session() or auth.refresh_session()
    """

    def __init__(
        self,
        client: OtpClient,
        holder: SessionHolder,
        store: SessionStore,
        persist: bool = True,
    ):
        self.client = client
        self.holder = holder
        self.store = store
        self.persist = persist
        self._refresh_lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Session access
    # -------------------------------------------------------------------------

    def get_active_session(self) -> Optional[Session]:
        """Return the in-memory session, if any."""
        return self.holder.session

    def get_access_token(self) -> Optional[str]:
        """
        Return a bearer token for the next request.

        A held session close to expiry is refreshed first. Returns None if
        there is no session or the refresh failed.
        """
        with self._refresh_lock:
            session = self.holder.session
            if session is None:
                return None
            if session.expires_within(EXPIRY_MARGIN_SECONDS):
                try:
                    session = self.refresh_session()
                except AuthError as e:
                    debug_log(f"Token refresh failed: {e}")
                    return None
            return session.access_token if session else None

    @property
    def is_signed_in(self) -> bool:
        return self.holder.session is not None

    @property
    def user_email(self) -> Optional[str]:
        session = self.holder.session
        return session.email if session else None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def refresh_session(self) -> Optional[Session]:
        """
        Get a usable session without user interaction.

        Uses the in-memory session, else the cached session file. Sessions
        close to expiry are refreshed with the provider.

        Returns:
            Session, or None if there is nothing to restore

        Raises:
            AuthError: If a cached or in-memory session could not be refreshed
        """
        session = self.holder.session
        if session is None:
            session = self._load_cached()
            if session is None:
                return None
            from_cache = True
        else:
            from_cache = False

        if session.expires_within(EXPIRY_MARGIN_SECONDS):
            try:
                session = self.client.refresh(session.refresh_token)
            except AuthError:
                if from_cache:
                    debug_log("Cached session rejected by provider, deleting it")
                    self._update(None)
                    raise AuthError("Stored session is invalid. Please sign in again.")
                raise

        self._update(session)
        return session

    def _load_cached(self) -> Optional[Session]:
        if not self.persist:
            return None
        try:
            return self.store.load()
        except (OSError, ValueError) as e:
            raise AuthError(f"Failed to restore stored session: {e}")

    def send_code(self, email: str):
        """Email a one-time passcode to the user."""
        self.client.send_otp(normalize_email(email))

    def verify_code(self, email: str, code: str) -> Session:
        """Verify a passcode and make the resulting session current."""
        session = self.client.verify_otp(normalize_email(email), code.strip())
        self._update(session)
        return session

    def sign_out(self):
        """Revoke the current session and forget it locally."""
        session = self.holder.session
        if session is None and self.persist:
            session = self._load_cached()
        if session is not None:
            self.client.sign_out(session.access_token)
        self._update(None)

    def _update(self, session: Optional[Session]):
        """Set the current session and mirror it to disk."""
        self.holder.set(session)
        if not self.persist:
            return
        if session is not None:
            self.store.save(session)
            debug_log(f"Session saved to {self.store.path}")
        elif self.store.delete():
            debug_log(f"Session file removed: {self.store.path}")


def normalize_email(email: str) -> str:
    return email.strip().lower()
