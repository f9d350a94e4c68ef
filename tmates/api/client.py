"""
Tmates API client.

Handles all HTTP interactions with the Tmates JSON API. Endpoint groups
live in sibling modules as plain functions taking an ApiClient.
"""

import json
import requests
from dataclasses import dataclass
from typing import Any, Callable, Optional
from urllib.parse import quote

from ..core.logging import debug_log
from ..core.paths import get_certifi_ssl_context


class ApiError(Exception):
    """
    API request failure.

    Attributes:
        status: HTTP status code, or None when no response was received
        detail: Decoded response payload (dict, list or text), if any
    """

    def __init__(self, message: str, status: Optional[int] = None, detail: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.detail = detail

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"[{self.status}] {self.message}"


@dataclass
class ApiClientConfig:
    """Configuration for ApiClient."""
    base_url: str
    timeout: int = 30


def quote_segment(value: str) -> str:
    """Encode a value for use as a single URL path segment."""
    return quote(str(value), safe="")


class ApiClient:
    """
    Bearer-authenticated JSON API client.

    The access token is read through token_getter on every request, so the
    client always sees the session currently held by the AuthManager.
    """

    def __init__(
        self,
        config: ApiClientConfig,
        token_getter: Callable[[], Optional[str]],
        http: Optional[requests.Session] = None,
    ):
        self.config = config
        self._token_getter = token_getter
        self._http = http or requests.Session()
        self._api_calls = 0

    @property
    def api_calls(self) -> int:
        """Total API calls made by this client."""
        return self._api_calls

    def _build_url(self, path: str) -> str:
        base = (self.config.base_url or "").rstrip("/")
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{base}{path}"

    def _get_headers(self, token: str, has_body: bool) -> dict:
        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {token}",
        }
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        """Decode a response body: JSON when declared as such, else text."""
        text = response.text
        if not text:
            return None
        if "application/json" in response.headers.get("content-type", ""):
            try:
                return json.loads(text)
            except ValueError:
                return text
        return text

    def request(
        self,
        method: str,
        path: str,
        query: Optional[dict] = None,
        body: Any = None,
    ) -> Any:
        """
        Make an API request and return the decoded payload.

        Args:
            method: HTTP method
            path: Path relative to the API base URL
            query: Query parameters (None values are dropped)
            body: JSON-serializable request body

        Raises:
            ApiError: On missing configuration, missing token, transport
                failure or non-2xx response
        """
        if not self.config.base_url:
            raise ApiError(
                "API base URL is not configured. Set TMATES_API_BASE_URL or "
                "configure it via `tmates config`."
            )

        token = self._token_getter()
        if not token:
            raise ApiError("You must be signed in to perform this action. Run `tmates login`.")

        params = None
        if query:
            params = {k: str(v).lower() if isinstance(v, bool) else v
                      for k, v in query.items() if v is not None}

        url = self._build_url(path)
        try:
            response = self._http.request(
                method,
                url,
                params=params,
                json=body,
                headers=self._get_headers(token, body is not None),
                timeout=self.config.timeout,
                verify=get_certifi_ssl_context(),
            )
        except requests.exceptions.RequestException as e:
            debug_log(f"{method} {path} failed: {e}")
            raise ApiError(f"Request failed: {e}")

        self._api_calls += 1
        debug_log(f"{method} {path} -> {response.status_code}")
        payload = self._decode(response)

        if not response.ok:
            if isinstance(payload, dict) and "detail" in payload:
                message = str(payload["detail"])
            else:
                message = response.reason or "Request failed"
            raise ApiError(message, status=response.status_code, detail=payload)

        return payload

    def get(self, path: str, query: Optional[dict] = None) -> Any:
        return self.request("GET", path, query=query)

    def post(self, path: str, body: Any = None, query: Optional[dict] = None) -> Any:
        return self.request("POST", path, query=query, body=body)

    def patch(self, path: str, body: Any = None) -> Any:
        return self.request("PATCH", path, body=body)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
