"""Base HTTP client for external metadata providers."""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for external API errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(APIError):
    """Raised when the provider rejects a request for exceeding its quota."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: int | None = None):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class NotFoundError(APIError):
    """Raised when the provider has no such resource."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


def _retry_after_seconds(response: httpx.Response) -> int | None:
    """Delay from a ``Retry-After`` header, or None unless given in seconds."""
    value = response.headers.get("Retry-After", "").strip()
    return int(value) if value.isascii() and value.isdigit() else None


class BaseAPIClient(ABC):
    """Abstract base class for metadata provider clients.

    Owns a lazily created ``httpx.AsyncClient`` and maps transport and HTTP
    failures onto the ``APIError`` hierarchy. No retries are attempted here.
    """

    def __init__(self, base_url: str, timeout: float = 10.0) -> None:
        """Initialize the base API client.

        Args:
            base_url: The base URL for the API.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    @abstractmethod
    def default_headers(self) -> dict[str, str]:
        """Return default headers for API requests."""
        ...

    @property
    def default_params(self) -> dict[str, Any]:
        """Query parameters sent with every request (e.g. API keys)."""
        return {}

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.default_headers,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make a GET request and return the decoded JSON body.

        Args:
            endpoint: API endpoint path, relative to the base URL.
            params: Query parameters, merged over ``default_params``.

        Raises:
            NotFoundError: If the resource is not found (404).
            RateLimitError: If rate limit is exceeded (429).
            APIError: For timeouts, transport failures and other HTTP errors.
        """
        client = await self._get_client()
        query = {**self.default_params, **(params or {})}

        try:
            response = await client.request("GET", endpoint.lstrip("/"), params=query)
        except httpx.TimeoutException as e:
            logger.warning("%s GET %s timed out", type(self).__name__, endpoint)
            raise APIError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            logger.warning("%s GET %s failed: %s", type(self).__name__, endpoint, e)
            raise APIError(f"Request failed: {e}") from e

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> dict[str, Any]:
        """Map an HTTP response onto a JSON payload or an ``APIError``."""
        if response.status_code == 404:
            raise NotFoundError()

        if response.status_code == 429:
            raise RateLimitError(retry_after=_retry_after_seconds(response))

        if response.status_code >= 400:
            raise APIError(
                f"API error: {response.text}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise APIError(f"Invalid JSON response: {e}") from e

        if not isinstance(data, dict):
            raise APIError("Invalid JSON response: expected an object")
        return data

    async def __aenter__(self) -> "BaseAPIClient":
        """Async context manager entry."""
        await self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
