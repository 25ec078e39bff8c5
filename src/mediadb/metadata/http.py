# ABOUTME: HTTP client abstraction for metadata provider API calls.
# ABOUTME: Provides rate limiting, status-carrying errors, and injectable transport for testing.

import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "mediadb/0.1.0"


class MetadataFetchError(Exception):
    """Raised when an HTTP request to a metadata provider fails.

    ``status_code`` is the upstream HTTP status, or None when the request
    never produced a response (DNS failure, timeout, refused connection).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP GET operations against metadata APIs."""

    def get(
        self,
        url: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any: ...


class MediaDbHttpClient:
    """HTTP client with rate limiting for metadata API calls.

    Wraps httpx.Client with a configurable minimum request interval. Failed
    responses are never retried; the caller decides what a failure means.
    """

    def __init__(
        self,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        min_request_interval: float = 0.1,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": user_agent, "Accept": "application/json"},
            "timeout": timeout,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)
        self._min_interval = min_request_interval
        self._last_request_time: float = 0.0

    def get(
        self,
        url: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send a GET request with rate limiting.

        Args:
            url: The URL to request.
            params: Optional query parameters.
            headers: Optional per-request headers, merged over the defaults.

        Returns:
            Parsed JSON response body (dict or list).

        Raises:
            MetadataFetchError: On transport failure, non-200 status, or a body
                that is not valid JSON.
        """
        self._rate_limit()

        try:
            response = self._client.get(url, params=params, headers=headers)
        except httpx.HTTPError as exc:
            raise MetadataFetchError(f"Request failed: {url}: {exc}") from exc

        if response.status_code != 200:
            logger.debug("HTTP %d from %s", response.status_code, url)
            raise MetadataFetchError(
                f"HTTP {response.status_code} from {url}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise MetadataFetchError(
                f"Invalid JSON from {url}: {exc}", status_code=response.status_code
            ) from exc

    def close(self) -> None:
        self._client.close()

    def _rate_limit(self) -> None:
        """Sleep if needed to maintain minimum interval between requests."""
        if self._min_interval <= 0:
            return
        now = time.monotonic()
        elapsed = now - self._last_request_time
        if elapsed < self._min_interval and self._last_request_time > 0:
            time.sleep(self._min_interval - elapsed)
        self._last_request_time = time.monotonic()
