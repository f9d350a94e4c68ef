"""
Tests for the Tmates API client and endpoint functions.

HTTP is faked with a MagicMock session; no network access.
"""

import json
from unittest.mock import MagicMock

import pytest
import requests

from tmates.api import ApiClient, ApiClientConfig, ApiError
from tmates.api import files, messages, pinboard, profile, teammates
from tmates.ui.components import format_api_error
from tmates.ui.primitives import strip_ansi


def fake_response(status=200, payload=None, text=None, content_type="application/json", reason="OK"):
    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.reason = reason
    response.headers = {"content-type": content_type}
    if text is None:
        text = "" if payload is None else json.dumps(payload)
    response.text = text
    return response


def make_client(response=None, token="token-1", base_url="https://api.example.com/"):
    http = MagicMock()
    http.request.return_value = response or fake_response(payload={})
    client = ApiClient(ApiClientConfig(base_url=base_url), token_getter=lambda: token, http=http)
    return client, http


class TestRequest:
    """ApiClient.request behaviour."""

    def test_success_returns_json(self):
        client, http = make_client(fake_response(payload={"hello": "world"}))

        assert client.get("/profile") == {"hello": "world"}
        assert client.api_calls == 1

        method, url = http.request.call_args.args
        kwargs = http.request.call_args.kwargs
        assert method == "GET"
        assert url == "https://api.example.com/profile"
        assert kwargs["headers"]["Authorization"] == "Bearer token-1"
        assert "Content-Type" not in kwargs["headers"]
        assert kwargs["json"] is None

    def test_body_sets_content_type(self):
        client, http = make_client()
        client.post("/agents/manage", body={"agent_key": "adam", "action": "add"})

        kwargs = http.request.call_args.kwargs
        assert kwargs["json"] == {"agent_key": "adam", "action": "add"}
        assert kwargs["headers"]["Content-Type"] == "application/json"

    def test_query_drops_none_and_lowercases_bools(self):
        client, http = make_client()
        client.get("/files", query={"limit": 5, "cursor": None, "shared": True})

        assert http.request.call_args.kwargs["params"] == {"limit": 5, "shared": "true"}

    def test_text_response(self):
        client, _ = make_client(fake_response(text="plain body", content_type="text/plain"))
        assert client.get("/health") == "plain body"

    def test_empty_response(self):
        client, _ = make_client(fake_response(status=204, text=""))
        assert client.delete("/chats/t1") is None

    def test_error_uses_detail(self):
        client, _ = make_client(fake_response(
            status=404, payload={"detail": "Thread not found"}, reason="Not Found",
        ))

        with pytest.raises(ApiError) as exc:
            client.get("/chats/t1")

        assert exc.value.status == 404
        assert exc.value.message == "Thread not found"
        assert exc.value.detail == {"detail": "Thread not found"}
        assert str(exc.value) == "[404] Thread not found"

    def test_error_without_detail_uses_reason(self):
        client, _ = make_client(fake_response(
            status=502, text="<html>bad gateway</html>", content_type="text/html", reason="Bad Gateway",
        ))

        with pytest.raises(ApiError) as exc:
            client.get("/pinboard")

        assert exc.value.message == "Bad Gateway"
        assert exc.value.detail == "<html>bad gateway</html>"

    def test_transport_error(self):
        client, http = make_client()
        http.request.side_effect = requests.exceptions.ConnectionError("connection refused")

        with pytest.raises(ApiError) as exc:
            client.get("/pinboard")

        assert exc.value.status is None
        assert "Request failed: connection refused" in str(exc.value)
        assert client.api_calls == 0

    def test_missing_base_url(self):
        client, http = make_client(base_url="")
        with pytest.raises(ApiError, match="API base URL is not configured"):
            client.get("/pinboard")
        http.request.assert_not_called()

    def test_missing_token(self):
        client, http = make_client(token=None)
        with pytest.raises(ApiError, match="must be signed in"):
            client.get("/pinboard")
        http.request.assert_not_called()

    def test_token_read_per_request(self):
        tokens = iter(["first", "second"])
        http = MagicMock()
        http.request.return_value = fake_response(payload={})
        client = ApiClient(ApiClientConfig(base_url="https://api"), token_getter=lambda: next(tokens), http=http)

        client.get("/a")
        client.get("/b")

        auth_headers = [c.kwargs["headers"]["Authorization"] for c in http.request.call_args_list]
        assert auth_headers == ["Bearer first", "Bearer second"]


class TestEndpoints:
    """Paths and payloads of the endpoint functions."""

    def call(self, func, *args, payload=None, **kwargs):
        client, http = make_client(fake_response(payload=payload))
        result = func(client, *args, **kwargs)
        call = http.request.call_args
        return result, call.args[0], call.args[1], call.kwargs

    def test_pinboard(self):
        _, method, url, kwargs = self.call(pinboard.fetch_pinboard_posts, payload=[])
        assert (method, url, kwargs["params"]) == ("GET", "https://api.example.com/pinboard", {"limit": 10})

        _, _, url, _ = self.call(pinboard.fetch_pinboard_post, "a b/c", payload={})
        assert url == "https://api.example.com/pinboard/a%20b%2Fc"

    def test_agent_store(self):
        result, _, url, _ = self.call(
            teammates.fetch_agent_store, payload={"available_agents": [{"key": "adam"}]},
        )
        assert url.endswith("/agents/store")
        assert result == [{"key": "adam"}]

    def test_manage_agent_rejects_unknown_action(self):
        client, http = make_client()
        with pytest.raises(ValueError):
            teammates.manage_agent(client, "adam", "promote")
        http.request.assert_not_called()

    def test_chat_endpoints(self):
        _, method, url, kwargs = self.call(messages.create_chat_thread, "adam", payload={"id": "t1"})
        assert (method, url, kwargs["params"]) == ("POST", "https://api.example.com/chats", {"agent_key": "adam"})

        _, method, url, kwargs = self.call(messages.send_chat_message, "t1", "hi", payload={})
        assert (method, url, kwargs["json"]) == ("POST", "https://api.example.com/chats/t1/messages", {"content": "hi"})

        _, method, url, _ = self.call(messages.delete_chat_thread, "t1")
        assert (method, url) == ("DELETE", "https://api.example.com/chats/t1")

        _, method, url, _ = self.call(messages.clear_chat_history, "t1")
        assert (method, url) == ("POST", "https://api.example.com/chats/t1/clear")

    def test_files_default_when_empty(self):
        result, _, _, kwargs = self.call(files.fetch_files)
        assert kwargs["params"] == {"limit": 25}
        assert result == {"files": []}

    def test_profile_updates(self):
        _, method, url, kwargs = self.call(profile.update_mobile_settings, allow_notifications=False, payload={})
        assert (method, url, kwargs["json"]) == (
            "PATCH", "https://api.example.com/settings/mobile", {"allow_notifications": False},
        )

        _, method, url, kwargs = self.call(profile.update_user_profile, display_name="Ada", payload={})
        assert (method, url, kwargs["json"]) == ("PATCH", "https://api.example.com/profile", {"display_name": "Ada"})


class TestFormatApiError:

    def test_with_status_and_detail(self):
        text = strip_ansi(format_api_error(ApiError("Bad", status=400, detail={"detail": "Bad"})))
        assert text.startswith("[400] Bad\n")
        assert '"detail": "Bad"' in text

    def test_without_status(self):
        assert strip_ansi(format_api_error(ApiError("Request failed: timeout"))) == "Request failed: timeout"

    def test_other_errors(self):
        assert strip_ansi(format_api_error(RuntimeError("boom"))) == "boom"
