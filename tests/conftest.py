"""Pytest configuration and shared fixtures."""

import io
import time
from pathlib import Path
from typing import Callable

import pytest

from tmates.api import ApiError
from tmates.auth import AuthError, AuthManager, Session, SessionHolder, SessionStore
from tmates.ui.screens import ScreenContext
from tmates.ui.widgets import Toolbar


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch) -> Path:
    """Point every config path at a throwaway directory."""
    home = tmp_path / "tmates-home"
    monkeypatch.setenv("TMATES_CLI_HOME", str(home))
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.delenv("TMATES_CLI_DISABLE_SESSION_CACHE", raising=False)
    return home


# =============================================================================
# API fake
# =============================================================================

class Responses:
    """Successive payloads for one route; the last one repeats."""

    def __init__(self, *payloads):
        self.payloads = list(payloads)

    def next(self):
        if len(self.payloads) > 1:
            return self.payloads.pop(0)
        return self.payloads[0]


class FakeApi:
    """
    Stand-in for ApiClient with canned routes.

    Routes map (method, path) to a payload, a Responses sequence, an
    exception instance (raised), or a callable taking (query, body).
    Unknown routes raise a 404 ApiError.
    """

    def __init__(self, routes: dict = None):
        self.routes = dict(routes or {})
        self.calls: list[tuple] = []

    def request(self, method, path, query=None, body=None):
        self.calls.append((method, path, query, body))
        if (method, path) not in self.routes:
            raise ApiError("Not Found", status=404, detail={"detail": "Not Found"})
        result = self.routes[(method, path)]
        if isinstance(result, Responses):
            result = result.next()
        if isinstance(result, BaseException):
            raise result
        if callable(result):
            return result(query, body)
        return result

    def get(self, path, query=None):
        return self.request("GET", path, query=query)

    def post(self, path, body=None, query=None):
        return self.request("POST", path, query=query, body=body)

    def patch(self, path, body=None):
        return self.request("PATCH", path, body=body)

    def delete(self, path):
        return self.request("DELETE", path)

    def calls_to(self, method: str, path: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == method and c[1] == path]


# =============================================================================
# Auth fake
# =============================================================================

def make_session(email: str = "ada@example.com", expires_in: int = 3600, suffix: str = "1") -> Session:
    return Session(
        access_token=f"access-{suffix}",
        refresh_token=f"refresh-{suffix}",
        expires_at=int(time.time()) + expires_in,
        user={"id": "user-1", "email": email},
    )


class FakeOtpClient:
    """OtpClient double recording calls; set *_error to make a call fail."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.send_error: AuthError | None = None
        self.verify_error: AuthError | None = None
        self.refresh_error: AuthError | None = None
        self.sign_out_error: AuthError | None = None
        self.refreshed = make_session(suffix="refreshed")

    def send_otp(self, email):
        self.calls.append(("send_otp", email))
        if self.send_error:
            raise self.send_error

    def verify_otp(self, email, token):
        self.calls.append(("verify_otp", email, token))
        if self.verify_error:
            raise self.verify_error
        return make_session(email=email, suffix="verified")

    def refresh(self, refresh_token):
        self.calls.append(("refresh", refresh_token))
        if self.refresh_error:
            raise self.refresh_error
        return self.refreshed

    def sign_out(self, access_token):
        self.calls.append(("sign_out", access_token))
        if self.sign_out_error:
            raise self.sign_out_error

    def count(self, name: str) -> int:
        return sum(1 for c in self.calls if c[0] == name)


@pytest.fixture
def otp_client() -> FakeOtpClient:
    return FakeOtpClient()


@pytest.fixture
def session_store(isolated_home) -> SessionStore:
    return SessionStore(isolated_home / "sessions" / "default.json")


@pytest.fixture
def auth(otp_client, session_store) -> AuthManager:
    return AuthManager(otp_client, SessionHolder(), session_store)


# =============================================================================
# Toolbar and screens
# =============================================================================

def make_toolbar(*lines: str) -> Toolbar:
    """Non-terminal toolbar fed with scripted input lines; EOF after the last."""
    script = "".join(f"{line}\n" for line in lines)
    toolbar = Toolbar(stream=io.StringIO(), input_stream=io.StringIO(script), is_tty=False)
    toolbar.init()
    return toolbar


def output_of(toolbar: Toolbar) -> str:
    return toolbar.stream.getvalue()


class SleepRecorder:
    def __init__(self):
        self.delays: list[float] = []

    def __call__(self, seconds: float):
        self.delays.append(seconds)


@pytest.fixture
def make_ctx() -> Callable[..., ScreenContext]:
    """Build a ScreenContext over a FakeApi and scripted input lines."""

    def build(api: FakeApi, *lines: str) -> ScreenContext:
        return ScreenContext(toolbar=make_toolbar(*lines), api=api, sleep=SleepRecorder())

    return build
