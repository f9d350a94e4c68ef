#!/usr/bin/env python3
"""
Tmates CLI - terminal client for your AI teammates.

Commands:
    tmates login     Sign in with a one-time passcode sent by email
    tmates logout    Sign out and delete the cached session
    tmates status    Show configuration and session summary
    tmates config    Show or change persisted endpoint overrides
    tmates [start]   Launch the interactive screens
"""

import argparse
import os
import sys
import traceback
from typing import Optional, TextIO

from tmates import __version__
from tmates.api import ApiClient, ApiClientConfig
from tmates.auth import (
    AuthError,
    AuthManager,
    OtpClient,
    OtpClientConfig,
    SessionHolder,
    SessionStore,
)
from tmates.config import (
    AppConfig,
    DISABLE_CACHE_VAR,
    PersistedSettings,
    load_environment,
    resolve_app_config,
)
from tmates.core.logging import close_log_file, debug_log, init_log_file, is_debug_enabled
from tmates.core.paths import get_logs_dir, get_session_file_path, get_settings_path
from tmates.ui import LineSpinner, Navigator, ScreenContext, ScreenRouter, Toolbar
from tmates.ui.screens import ensure_interactive_session
from tmates.ui.primitives import bold, gray, primary, red, secondary_bold, yellow


# ============================================================================
# Line-mode prompts (one-shot commands)
# ============================================================================

def prompt_for_email(initial: Optional[str] = None) -> str:
    if initial and initial.strip():
        return initial.strip()
    answer = input("Email: ").strip()
    if not answer:
        raise ValueError("Email is required.")
    return answer


def prompt_for_otp(initial: Optional[str] = None) -> str:
    if initial and initial.strip():
        return initial.strip()
    answer = input("One-time passcode: ").strip()
    if not answer:
        raise ValueError("Passcode is required.")
    return answer


def format_rows(rows: list[tuple[str, str]]) -> str:
    """Label/value table with labels padded to the same width."""
    width = max(len(label) for label, _ in rows)
    return "\n".join(f"{label.ljust(width)}  {value}" for label, value in rows)


def mask_secret(value: str) -> str:
    if not value:
        return ""
    return f"{value[:6]}…" if len(value) > 6 else "…"


# ============================================================================
# Main Application
# ============================================================================


class TmatesApp:
    """Main application controller."""

    def __init__(self, config: AppConfig, settings: PersistedSettings, stream: Optional[TextIO] = None):
        self.config = config
        self.settings = settings
        self.stream = stream or sys.stdout

        # One session holder per process, shared by auth (writes) and API (reads)
        self.holder = SessionHolder()
        self.store = SessionStore(get_session_file_path())
        self.auth = AuthManager(
            OtpClient(OtpClientConfig(
                supabase_url=config.supabase_url,
                anon_key=config.supabase_anon_key,
            )),
            self.holder,
            self.store,
            persist=config.session_cache_enabled,
        )
        self.api = ApiClient(
            ApiClientConfig(base_url=config.api_base_url),
            token_getter=self.auth.get_access_token,
        )

    def _print(self, text: str = ""):
        self.stream.write(f"{text}\n")
        self.stream.flush()

    def print_warnings(self):
        for warning in self.config.warnings:
            sys.stderr.write(f"{yellow(warning)}\n")

    # ------------------------------------------------------------------------
    # One-shot commands
    # ------------------------------------------------------------------------

    def login(self, email: Optional[str] = None, otp: Optional[str] = None) -> int:
        """Sign in with a one-time passcode."""
        self.print_warnings()
        email = prompt_for_email(email)

        spinner = LineSpinner("Sending one-time passcode", self.stream).start()
        try:
            self.auth.send_code(email)
        except AuthError:
            spinner.fail("Failed to send passcode.")
            raise
        spinner.succeed("Passcode sent. Check your email.")

        otp = prompt_for_otp(otp)
        spinner = LineSpinner("Verifying passcode", self.stream).start()
        try:
            session = self.auth.verify_code(email, otp)
        except AuthError:
            spinner.fail("Verification failed.")
            raise
        spinner.succeed("Login successful.")
        self._print(f"Authenticated as {secondary_bold(session.email or email)}")
        return 0

    def logout(self) -> int:
        """Sign out and delete the cached session."""
        spinner = LineSpinner("Signing out", self.stream).start()
        try:
            self.auth.sign_out()
        except AuthError:
            spinner.fail("Failed to sign out.")
            raise
        spinner.succeed("Signed out successfully.")
        return 0

    def status(self) -> int:
        """Print configuration and session summary."""
        self.print_warnings()
        try:
            session = self.auth.refresh_session()
        except AuthError as e:
            sys.stderr.write(f"{yellow(str(e))}\n")
            session = None

        token = self.auth.get_access_token()
        if not self.config.session_cache_enabled:
            cached = "No"
        else:
            cached = "Yes" if token and self.store.exists else "No"

        rows = [
            ("Supabase URL", self.config.supabase_url or red("Not set")),
            ("API Base URL", self.config.api_base_url or red("Not set")),
            ("Session", primary("Active") if session else yellow("Missing")),
            ("User", secondary_bold(session.email or "unknown") if session else gray("-")),
            ("Token cached", cached),
        ]
        self._print()
        self._print(format_rows(rows))
        self._print()
        return 0

    def configure(
        self,
        api_url: Optional[str] = None,
        supabase_url: Optional[str] = None,
        supabase_anon_key: Optional[str] = None,
        reset: bool = False,
    ) -> int:
        """Show or change the persisted endpoint overrides."""
        changed = False
        if reset:
            self.settings.reset()
            changed = True
        changed = self.settings.update(
            custom_api_base_url=api_url,
            custom_supabase_url=supabase_url,
            custom_supabase_anon_key=supabase_anon_key,
        ) or changed

        if changed:
            self.settings.save()
            debug_log(f"Settings saved: {sorted(self.settings.to_dict())}")
            self._print(f"Settings saved to {self.settings.path}")

        s = self.settings
        rows = [
            ("API Base URL", s.custom_api_base_url or gray("(environment)")),
            ("Supabase URL", s.custom_supabase_url or gray("(environment)")),
            ("Supabase anon key", mask_secret(s.custom_supabase_anon_key) or gray("(environment)")),
        ]
        self._print()
        self._print(bold("Custom overrides"))
        self._print(format_rows(rows))
        self._print()
        return 0

    # ------------------------------------------------------------------------
    # Interactive
    # ------------------------------------------------------------------------

    def start(self) -> int:
        """Run the interactive screens until the user quits."""
        toolbar = Toolbar()
        toolbar.init()
        session = None
        try:
            for warning in self.config.warnings:
                toolbar.append_content(yellow(warning))
            session = ensure_interactive_session(self.auth, toolbar)
            if session is not None:
                ctx = ScreenContext(toolbar=toolbar, api=self.api)
                Navigator(session).run(ScreenRouter(ctx))
        finally:
            toolbar.cleanup()

        if session is None:
            self._print(
                f"{yellow('Unable to continue without signing in.')} "
                f"Run {bold('tmates login')} to try again."
            )
            return 0
        self._print("\nGoodbye!\n")
        return 0


# ============================================================================
# Entry point
# ============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tmates",
        description="Tmates command line interface",
    )
    parser.add_argument(
        "-v", "--version", action="version", version=__version__,
        help="Display version number",
    )
    commands = parser.add_subparsers(dest="command")

    login = commands.add_parser("login", help="Authenticate with a one-time passcode")
    login.add_argument("-e", "--email", help="Email address used for Tmates login")
    login.add_argument("--otp", help="One-time passcode received via email")
    login.add_argument(
        "--no-cache", action="store_true",
        help="Do not persist the session on disk for this login",
    )

    commands.add_parser("logout", help="Clear the stored session and sign out")
    commands.add_parser("status", help="Show authentication status and configuration summary")

    config = commands.add_parser("config", help="Show or change persisted endpoint overrides")
    config.add_argument("--api-url", help="Custom API base URL")
    config.add_argument("--supabase-url", help="Custom identity provider URL")
    config.add_argument("--supabase-anon-key", help="Custom identity provider anonymous key")
    config.add_argument("--reset", action="store_true", help="Clear every override")

    commands.add_parser("start", help="Launch the interactive Tmates CLI experience")
    return parser


def run(args: argparse.Namespace) -> int:
    """Resolve configuration and dispatch a parsed command."""
    if args.command == "login" and args.no_cache:
        os.environ[DISABLE_CACHE_VAR] = "1"

    init_log_file(get_logs_dir(), version=__version__)
    debug_log(f"Command: {args.command or 'start'}")

    load_environment()
    settings = PersistedSettings.load(get_settings_path())
    app = TmatesApp(resolve_app_config(settings), settings)

    if args.command == "login":
        return app.login(email=args.email, otp=args.otp)
    if args.command == "logout":
        return app.logout()
    if args.command == "status":
        return app.status()
    if args.command == "config":
        return app.configure(
            api_url=args.api_url,
            supabase_url=args.supabase_url,
            supabase_anon_key=args.supabase_anon_key,
            reset=args.reset,
        )
    return app.start()


def main(argv: Optional[list[str]] = None):
    """Entry point."""
    args = build_parser().parse_args(argv)
    try:
        code = run(args)
    except KeyboardInterrupt:
        print("\n\nCancelled by user.")
        code = 0
    except Exception as e:
        sys.stderr.write(f"{e}\n")
        if is_debug_enabled():
            traceback.print_exc()
        code = 1
    finally:
        close_log_file()
    sys.exit(code)


if __name__ == "__main__":
    main()
