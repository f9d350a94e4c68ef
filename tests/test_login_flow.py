"""
Tests for the inline login flow and interactive session bootstrap.
"""

from tmates.auth import AuthError
from tmates.core.logging import close_log_file, init_log_file
from tmates.ui.screens import LoginFlow, LoginStep, ensure_interactive_session
from tmates.ui.widgets import DEFAULT_HELP_TEXT
from tests.conftest import make_session, make_toolbar, output_of


class TestLoginFlow:
    """State transitions of LoginFlow."""

    def test_successful_login(self, auth, otp_client, session_store):
        """Email then code signs in and persists the session."""
        toolbar = make_toolbar("Ada@Example.com ", "123456")
        session = LoginFlow(auth, toolbar).run()

        assert session is not None
        assert auth.get_active_session() is session
        assert session_store.load() == session
        assert otp_client.calls[0] == ("send_otp", "ada@example.com")
        assert otp_client.calls[1] == ("verify_otp", "ada@example.com", "123456")

        out = output_of(toolbar)
        assert "✓ Passcode sent. Check your email." in out
        assert "✓ Login successful." in out
        assert "Welcome," in out

    def test_typed_credentials_not_logged(self, auth, tmp_path):
        log = init_log_file(tmp_path)
        try:
            LoginFlow(auth, make_toolbar("ada@example.com", "493817")).run()
        finally:
            close_log_file()

        text = log.path.read_text()
        assert "493817" not in text
        assert "ada@example.com" not in text
        assert "Prompt submitted (6 chars)" in text

    def test_step_history_of_success(self, auth):
        flow = LoginFlow(auth, make_toolbar("a@b.com", "000000"))
        flow.run()

        assert flow.steps == [
            LoginStep.AWAIT_EMAIL,
            LoginStep.SENDING_CODE,
            LoginStep.AWAIT_CODE,
            LoginStep.VERIFYING_CODE,
            LoginStep.DONE,
        ]

    def test_empty_email_reprompts(self, auth, otp_client):
        """Blank input stays on the email step without calling the provider."""
        toolbar = make_toolbar("", "   ")
        flow = LoginFlow(auth, toolbar)

        assert flow.run() is None
        assert flow.steps == [LoginStep.AWAIT_EMAIL]
        assert otp_client.calls == []
        assert output_of(toolbar).count("✗ Email is required.") == 2

    def test_send_failure_returns_to_email(self, auth, otp_client):
        """A rejected send goes back to the email prompt."""
        otp_client.send_error = AuthError("Failed to send verification code: Signups not allowed")
        toolbar = make_toolbar("", "a@b.com")
        flow = LoginFlow(auth, toolbar)

        assert flow.run() is None
        assert flow.steps == [LoginStep.AWAIT_EMAIL, LoginStep.SENDING_CODE, LoginStep.AWAIT_EMAIL]
        out = output_of(toolbar)
        assert "✗ Failed to send passcode." in out
        assert "Signups not allowed" in out

    def test_verify_failure_returns_to_code_without_resend(self, auth, otp_client):
        """A wrong code re-prompts for the code only."""
        otp_client.verify_error = AuthError("Verification failed: Token has expired or is invalid")
        toolbar = make_toolbar("a@b.com", "111111")
        flow = LoginFlow(auth, toolbar)

        assert flow.run() is None
        assert flow.steps[-2:] == [LoginStep.VERIFYING_CODE, LoginStep.AWAIT_CODE]
        assert otp_client.count("send_otp") == 1
        assert "✗ Verification failed." in output_of(toolbar)

    def test_retry_after_verify_failure(self, auth, otp_client):
        toolbar = make_toolbar("a@b.com", "111111", "222222")
        flow = LoginFlow(auth, toolbar)
        otp_client.verify_error = AuthError("Verification failed: invalid")

        original_verify = otp_client.verify_otp

        def fail_once(email, token):
            try:
                return original_verify(email, token)
            finally:
                otp_client.verify_error = None

        otp_client.verify_otp = fail_once
        session = flow.run()

        assert session is not None
        assert otp_client.count("send_otp") == 1
        assert otp_client.count("verify_otp") == 2

    def test_empty_code_reprompts(self, auth, otp_client):
        toolbar = make_toolbar("a@b.com", "", "123456")
        assert LoginFlow(auth, toolbar).run() is not None
        assert "✗ Passcode is required." in output_of(toolbar)
        assert otp_client.count("verify_otp") == 1

    def test_cancel_at_code_prompt(self, auth, otp_client):
        """End of input at the code prompt aborts without verifying."""
        flow = LoginFlow(auth, make_toolbar("a@b.com"))

        assert flow.run() is None
        assert flow.step is LoginStep.AWAIT_CODE
        assert otp_client.count("verify_otp") == 0
        assert auth.get_active_session() is None

    def test_help_text_restored(self, auth):
        toolbar = make_toolbar()
        LoginFlow(auth, toolbar).run()
        assert toolbar.current_help_text == DEFAULT_HELP_TEXT


class TestEnsureInteractiveSession:
    """Session bootstrap for the interactive CLI."""

    def test_uses_active_session(self, auth, otp_client):
        session = make_session()
        auth.holder.set(session)
        toolbar = make_toolbar()

        assert ensure_interactive_session(auth, toolbar) is session
        assert otp_client.calls == []

    def test_restores_cached_session(self, auth, session_store, otp_client):
        cached = make_session()
        session_store.save(cached)

        result = ensure_interactive_session(auth, make_toolbar())

        assert result == cached
        assert otp_client.count("refresh") == 0

    def test_refresh_failure_falls_back_to_login(self, auth, session_store, otp_client):
        """An invalid cached session is reported, removed, then login runs."""
        session_store.save(make_session(expires_in=-10))
        otp_client.refresh_error = AuthError("Failed to refresh session: Invalid Refresh Token")
        toolbar = make_toolbar("a@b.com", "123456")

        result = ensure_interactive_session(auth, toolbar)

        out = output_of(toolbar)
        assert "Failed to restore saved session automatically:" in out
        assert "Stored session is invalid. Please sign in again." in out
        assert "No active session detected." in out
        assert result is not None
        assert result.email == "a@b.com"

    def test_cancelled_login_returns_none(self, auth):
        toolbar = make_toolbar()
        assert ensure_interactive_session(auth, toolbar) is None
        assert "Let's get you signed in." in output_of(toolbar)
