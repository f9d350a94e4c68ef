"""
Inline login flow and session bootstrap.

    AWAIT_EMAIL -> SENDING_CODE -> AWAIT_CODE -> VERIFYING_CODE -> DONE

A failed send restarts from AWAIT_EMAIL; a failed verification goes back
to AWAIT_CODE without re-sending. Cancelling any prompt aborts the flow.
"""
from __future__ import annotations

from enum import Enum, auto
from typing import Optional

from ...auth import AuthError, AuthManager, Session
from ...core.logging import debug_log
from ..primitives import bold, red, yellow
from ..widgets import Toolbar


class LoginStep(Enum):
    AWAIT_EMAIL = auto()
    SENDING_CODE = auto()
    AWAIT_CODE = auto()
    VERIFYING_CODE = auto()
    DONE = auto()


EMAIL_HINT = "Enter the email address for your Tmates account • Ctrl+C to cancel"
CODE_HINT = "Enter the one-time passcode from your email • Ctrl+C to cancel"


class LoginFlow:
    """Passwordless sign-in driven through the toolbar."""

    def __init__(self, auth: AuthManager, toolbar: Toolbar):
        self.auth = auth
        self.toolbar = toolbar
        self.step = LoginStep.AWAIT_EMAIL
        self.steps = [LoginStep.AWAIT_EMAIL]
        self.email: Optional[str] = None
        self.code: Optional[str] = None
        self.session: Optional[Session] = None

    def _goto(self, step: LoginStep):
        debug_log(f"Login: {self.step.name} -> {step.name}")
        self.step = step
        self.steps.append(step)

    def run(self) -> Optional[Session]:
        """
        Run until signed in or cancelled.

        Returns:
            Session, or None if the user cancelled
        """
        try:
            while self.step is not LoginStep.DONE:
                if self.step is LoginStep.AWAIT_EMAIL:
                    if not self._await_email():
                        return None
                elif self.step is LoginStep.SENDING_CODE:
                    self._send_code()
                elif self.step is LoginStep.AWAIT_CODE:
                    if not self._await_code():
                        return None
                elif self.step is LoginStep.VERIFYING_CODE:
                    self._verify_code()
        finally:
            self.toolbar.reset_help_text()
        return self.session

    def _await_email(self) -> bool:
        self.toolbar.set_help_text(EMAIL_HINT)
        raw = self.toolbar.prompt_user()
        if raw is None:
            return False
        email = raw.strip()
        if not email:
            self.toolbar.show_error("Email is required.")
            return True
        self.email = email
        self._goto(LoginStep.SENDING_CODE)
        return True

    def _send_code(self):
        try:
            with self.toolbar.spinner("Sending one-time passcode"):
                self.auth.send_code(self.email)
        except AuthError as e:
            self.toolbar.show_error("Failed to send passcode.")
            self.toolbar.append_content(red(str(e)))
            self._goto(LoginStep.AWAIT_EMAIL)
            return
        self.toolbar.show_success("Passcode sent. Check your email.")
        self.toolbar.append_content(f"Passcode sent to {bold(self.email)}.")
        self._goto(LoginStep.AWAIT_CODE)

    def _await_code(self) -> bool:
        self.toolbar.set_help_text(CODE_HINT)
        raw = self.toolbar.prompt_user()
        if raw is None:
            return False
        code = raw.strip()
        if not code:
            self.toolbar.show_error("Passcode is required.")
            return True
        self.code = code
        self._goto(LoginStep.VERIFYING_CODE)
        return True

    def _verify_code(self):
        try:
            with self.toolbar.spinner("Verifying passcode"):
                session = self.auth.verify_code(self.email, self.code)
        except AuthError as e:
            self.toolbar.show_error("Verification failed.")
            self.toolbar.append_content(red(str(e)))
            self._goto(LoginStep.AWAIT_CODE)
            return
        self.toolbar.show_success("Login successful.")
        self.toolbar.append_content(f"Welcome, {bold(session.email or self.email)}!")
        self.session = session
        self._goto(LoginStep.DONE)


def ensure_interactive_session(auth: AuthManager, toolbar: Toolbar) -> Optional[Session]:
    """
    Get a session for the interactive CLI.

    In-memory session first, then the cached/refreshed one, then the
    inline login flow.
    """
    session = auth.get_active_session()
    if session is not None:
        return session

    try:
        session = auth.refresh_session()
    except AuthError as e:
        toolbar.append_content(f"{yellow('Failed to restore saved session automatically:')} {e}")
        session = None
    if session is not None:
        return session

    toolbar.append_content(f"{yellow('No active session detected.')} Let's get you signed in.")
    return LoginFlow(auth, toolbar).run()
