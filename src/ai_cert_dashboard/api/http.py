"""Statistics API HTTP client with retry handling.

Async HTTP client for the statistics backend. Every backend response is
wrapped in a ``{code, message, data}`` envelope; the client unwraps it into
an :class:`ApiEnvelope` and leaves interpretation of the application code to
callers.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from ai_cert_dashboard import __version__
from ai_cert_dashboard.config import ApiConfig

logger = logging.getLogger(__name__)

SUCCESS_CODE = 200


@dataclass
class ApiEnvelope:
    """Unwrapped backend response envelope."""

    code: int
    message: str
    data: Any
    http_status: int = 200
    url: str = ""

    @property
    def is_success(self) -> bool:
        """Check if the application code signals success."""
        return self.code == SUCCESS_CODE

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiEnvelope":
        """Build an envelope from an HTTP response.

        Bodies that are not an envelope are reported with the HTTP status as
        the application code and the raw text as the message.
        """
        try:
            body = response.json() if response.content else None
        except ValueError:
            logger.warning("Non-JSON response from %s", response.url)
            body = None

        if isinstance(body, dict) and "code" in body:
            return cls(
                code=int(body.get("code") or 0),
                message=str(body.get("message") or ""),
                data=body.get("data"),
                http_status=response.status_code,
                url=str(response.url),
            )

        return cls(
            code=response.status_code,
            message=response.text,
            data=body,
            http_status=response.status_code,
            url=str(response.url),
        )


class DashboardHTTPError(Exception):
    """Base exception for statistics API transport errors."""


class DepartmentLookupError(DashboardHTTPError):
    """Raised when the department-children lookup fails."""


class DashboardHTTPClient:
    """Async HTTP client for the statistics backend.

    Features:
    - Base URL and API prefix handling
    - Retry logic with exponential backoff on 5xx, timeouts and network errors
    - Request logging
    - Injectable httpx transport (used to target the in-process mock backend)
    """

    DEFAULT_TIMEOUT = 30.0
    DEFAULT_MAX_RETRIES = 3
    INITIAL_BACKOFF = 0.5
    BACKOFF_MULTIPLIER = 2.0

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:3000",
        prefix: str = "/ai_transform_webapi",
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        account: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Backend origin.
            prefix: Path prefix prepended to every API path.
            timeout: Request timeout in seconds.
            max_retries: Maximum number of retries for failed requests.
            account: Employee account forwarded in the ``X-Account`` header.
            transport: Optional httpx transport replacing the network.
        """
        self._base_url = base_url.rstrip("/")
        self._prefix = prefix.rstrip("/")
        self._timeout = timeout
        self._max_retries = max_retries
        self._account = account
        self._transport = transport

        self._client: httpx.AsyncClient | None = None
        self.requests_made = 0

    @classmethod
    def from_config(
        cls, config: ApiConfig, transport: httpx.AsyncBaseTransport | None = None
    ) -> "DashboardHTTPClient":
        """Create a client from the ``api`` configuration section."""
        return cls(
            base_url=config.base_url,
            prefix=config.prefix,
            timeout=config.timeout_seconds,
            max_retries=config.max_retries,
            account=config.account,
            transport=transport,
        )

    def _get_headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": f"ai-cert-dashboard/{__version__}",
        }
        if self._account:
            headers["X-Account"] = self._account
        return headers

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure async client is initialized.

        Returns:
            Active httpx.AsyncClient instance.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=self._get_headers(),
                transport=self._transport,
                follow_redirects=True,
            )
        return self._client

    def _full_path(self, path: str) -> str:
        return f"{self._prefix}/{path.lstrip('/')}"

    async def _retry_request(
        self,
        method: str,
        path: str,
        retry_count: int,
        **kwargs: Any,
    ) -> httpx.Response:
        """Retry a request with exponential backoff.

        Raises:
            DashboardHTTPError: If max retries exceeded.
        """
        if retry_count >= self._max_retries:
            raise DashboardHTTPError(f"Max retries ({self._max_retries}) exceeded for {method} {path}")

        wait_seconds = self.INITIAL_BACKOFF * (self.BACKOFF_MULTIPLIER**retry_count)
        logger.debug(
            "Retry %d/%d for %s %s after %.1fs",
            retry_count + 1,
            self._max_retries,
            method,
            path,
            wait_seconds,
        )
        await asyncio.sleep(wait_seconds)

        return await self._do_request(method, path, retry_count + 1, **kwargs)

    async def _do_request(
        self,
        method: str,
        path: str,
        retry_count: int = 0,
        **kwargs: Any,
    ) -> httpx.Response:
        """Execute HTTP request with retry logic.

        Raises:
            DashboardHTTPError: On request failure after retries.
        """
        client = await self._ensure_client()

        logger.debug("%s %s (attempt %d)", method, path, retry_count + 1)

        try:
            response = await client.request(method, path, **kwargs)
            self.requests_made += 1

            if 500 <= response.status_code < 600:
                logger.warning("Server error %d for %s %s", response.status_code, method, path)
                return await self._retry_request(method, path, retry_count, **kwargs)

            return response

        except httpx.TimeoutException as e:
            logger.warning("Timeout for %s %s", method, path)
            if retry_count < self._max_retries:
                return await self._retry_request(method, path, retry_count, **kwargs)
            raise DashboardHTTPError(f"Request timeout: {e}") from e

        except httpx.NetworkError as e:
            logger.warning("Network error for %s %s: %s", method, path, e)
            if retry_count < self._max_retries:
                return await self._retry_request(method, path, retry_count, **kwargs)
            raise DashboardHTTPError(f"Network error: {e}") from e

    async def get(self, path: str, params: dict[str, Any] | None = None) -> ApiEnvelope:
        """GET an API path and unwrap the envelope.

        Args:
            path: API path below the prefix (e.g. "/department-info/children").
            params: Query parameters; None values are dropped.

        Returns:
            ApiEnvelope with the application code and payload.

        Raises:
            DashboardHTTPError: On transport failure after retries.
        """
        query = {key: value for key, value in (params or {}).items() if value is not None}
        response = await self._do_request("GET", self._full_path(path), params=query)
        return ApiEnvelope.from_response(response)

    async def close(self) -> None:
        """Close the HTTP client and cleanup resources."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "DashboardHTTPClient":
        """Async context manager entry."""
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
