from __future__ import annotations

import logging
import threading
import time
from typing import Any, Protocol

import httpx

from theme_client.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_API_CALLS_PER_SECOND = 2.0


class HttpTransport(Protocol):
    def get(self, path: str) -> httpx.Response: ...

    def post(self, path: str, body: Any) -> httpx.Response: ...

    def put(self, path: str, body: Any) -> httpx.Response: ...

    def delete(self, path: str) -> httpx.Response: ...


class HttpxTransport:
    """Authenticated, rate limited JSON transport for a single shop domain.

    Requests are spaced at least ``1 / api_calls_per_second`` seconds apart.
    The spacing is shared by every thread using this transport instance.
    """

    def __init__(
        self,
        *,
        domain: str,
        password: str,
        timeout_seconds: float = 30.0,
        proxy: str | None = None,
        api_calls_per_second: float = DEFAULT_API_CALLS_PER_SECOND,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if api_calls_per_second <= 0:
            raise ValueError("api_calls_per_second must be positive")
        self._min_interval = 1.0 / api_calls_per_second
        self._lock = threading.Lock()
        self._last_request_at: float | None = None
        self._timeout_seconds = timeout_seconds
        self._client = httpx.Client(
            base_url=f"https://{domain}",
            headers={
                "Accept": "application/json",
                "X-Shopify-Access-Token": password,
            },
            timeout=httpx.Timeout(timeout_seconds),
            proxy=proxy,
            transport=transport,
        )

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    def close(self) -> None:
        self._client.close()

    def get(self, path: str) -> httpx.Response:
        return self._request("GET", path)

    def post(self, path: str, body: Any) -> httpx.Response:
        return self._request("POST", path, json_body=body)

    def put(self, path: str, body: Any) -> httpx.Response:
        return self._request("PUT", path, json_body=body)

    def delete(self, path: str) -> httpx.Response:
        return self._request("DELETE", path)

    def _wait_for_slot(self) -> None:
        with self._lock:
            now = time.monotonic()
            if self._last_request_at is not None:
                remaining = self._min_interval - (now - self._last_request_at)
                if remaining > 0:
                    time.sleep(remaining)
                    now = time.monotonic()
            self._last_request_at = now

    def _request(self, method: str, path: str, json_body: Any = None) -> httpx.Response:
        self._wait_for_slot()
        logger.debug("%s %s", method, path)
        try:
            return self._client.request(method, path, json=json_body)
        except httpx.TimeoutException as exc:
            raise TransportError(
                message=f"Request timed out after {self._timeout_seconds}s ({method} {path}).",
                status_code=504,
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(message=f"Network error while calling Shopify: {exc}") from exc
