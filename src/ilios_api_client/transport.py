"""HTTP transport for the Ilios API client.

The client talks to the API through the small ``Transport`` protocol, so
hosts can plug in their own HTTP stack. ``HttpxTransport`` is the default.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import httpx

from .errors import NetworkError, TimeoutError
from .telemetry import get_logger, trace_operation

if TYPE_CHECKING:
    from .config import IliosClientConfig, RetryConfig

USER_AGENT = "ilios-api-client/0.1.0 Python"


@runtime_checkable
class Transport(Protocol):
    """Protocol for blocking HTTP transports."""

    def reset_header(self) -> None:
        """Clear all request headers set by ``set_header``."""
        ...

    def set_header(self, headers: list[str]) -> None:
        """Set request headers given as ``"Name: value"`` strings."""
        ...

    def get(self, url: str) -> str:
        """Perform a GET request and return the raw response body."""
        ...


def parse_header_lines(headers: list[str]) -> dict[str, str]:
    """Split ``"Name: value"`` header lines into a mapping.

    Raises:
        ValueError: If a line has no ``:`` separator.
    """
    parsed: dict[str, str] = {}
    for line in headers:
        name, sep, value = line.partition(":")
        if not sep or not name.strip():
            msg = f"Malformed header line: {line!r}"
            raise ValueError(msg)
        parsed[name.strip()] = value.strip()
    return parsed


def create_http_client(config: IliosClientConfig) -> httpx.Client:
    """Create configured sync HTTP client.

    Args:
        config: Client configuration.

    Returns:
        Configured httpx.Client.
    """
    return httpx.Client(
        timeout=httpx.Timeout(
            connect=config.connect_timeout,
            read=config.timeout,
            write=config.timeout,
            pool=config.timeout,
        ),
        headers={
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        },
        follow_redirects=False,
    )


class HttpxTransport:
    """Transport backed by ``httpx.Client`` with retry on connection failures.

    Bodies are returned for every HTTP status: the API reports failures as
    JSON error payloads, which the client classifies.
    """

    def __init__(
        self,
        client: httpx.Client,
        retry_config: RetryConfig,
    ) -> None:
        """Initialize transport.

        Args:
            client: HTTP client.
            retry_config: Retry configuration.
        """
        self._client = client
        self._retry_config = retry_config
        self._headers: dict[str, str] = {}
        self._logger = get_logger()

    @classmethod
    def from_config(cls, config: IliosClientConfig) -> HttpxTransport:
        """Create transport with its own HTTP client."""
        return cls(create_http_client(config), config.retry)

    @property
    def headers(self) -> dict[str, str]:
        """Get headers sent with each request."""
        return dict(self._headers)

    def reset_header(self) -> None:
        self._headers = {}

    def set_header(self, headers: list[str]) -> None:
        self._headers.update(parse_header_lines(headers))

    def get(self, url: str) -> str:
        """Execute GET request with retry logic.

        Args:
            url: Request URL.

        Returns:
            Response body text.

        Raises:
            TimeoutError: If the request keeps timing out.
            NetworkError: On network failure after retries.
        """
        last_error: NetworkError | None = None

        for attempt in range(self._retry_config.max_retries + 1):
            try:
                with trace_operation(
                    "http_request",
                    attributes={"http.method": "GET", "http.url": url, "attempt": attempt},
                ) as span:
                    response = self._client.get(url, headers=self._headers)
                    span.set_attribute("http.status_code", response.status_code)
                    return response.text

            except httpx.TimeoutException as e:
                last_error = TimeoutError(f"Request timed out: {e}", cause=e)

            except httpx.ConnectError as e:
                last_error = NetworkError(f"Connection failed: {e}", cause=e)

            except httpx.HTTPError as e:
                raise NetworkError(f"HTTP error: {e}", cause=e) from e

            if attempt < self._retry_config.max_retries:
                delay = self._retry_config.get_delay(attempt)
                self._logger.warning(
                    "Request failed, retrying",
                    attempt=attempt,
                    delay=delay,
                    error=last_error.message,
                )
                time.sleep(delay)

        raise last_error or NetworkError("Request failed after retries")

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()
