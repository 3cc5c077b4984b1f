"""Base HTTP client with retry logic and common functionality."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from config.settings import Settings, get_settings


logger = logging.getLogger(__name__)


class ClientError(Exception):
    """Base exception for client errors."""

    def __init__(self, message: str, client_name: str, recoverable: bool = True) -> None:
        super().__init__(message)
        self.client_name = client_name
        self.recoverable = recoverable


class BaseClient:
    """Synchronous httpx wrapper shared by the service clients."""

    name = "http"

    def __init__(
        self,
        base_url: str | None = None,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
        backoff_seconds: float = 1.0,
    ) -> None:
        self.settings = settings or get_settings()
        self.base_url = (base_url or self.settings.decision_service_url).rstrip("/")
        self.backoff_seconds = backoff_seconds
        self._transport = transport
        self._client: httpx.Client | None = None

    def get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            auth = None
            if self.settings.decision_service_username:
                auth = httpx.BasicAuth(
                    self.settings.decision_service_username,
                    self.settings.decision_service_password or "",
                )
            self._client = httpx.Client(
                base_url=self.base_url,
                auth=auth,
                timeout=httpx.Timeout(self.settings.request_timeout),
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None

    def __enter__(self) -> BaseClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request_with_retry(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make HTTP request with retry logic and exponential backoff."""
        client = self.get_client()
        last_exception: Exception | None = None

        for attempt in range(self.settings.max_retries):
            try:
                response = client.request(method, url, **kwargs)
                response.raise_for_status()
                return response

            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                if status >= 500:
                    last_exception = e
                elif status == 429:
                    last_exception = ClientError(
                        f"Rate limited (HTTP 429). Retry-After: {e.response.headers.get('Retry-After', 'unknown')}",
                        self.name,
                        recoverable=True,
                    )
                else:
                    raise ClientError(
                        f"HTTP error {status}: {e.response.text[:200]}",
                        self.name,
                        recoverable=False,
                    ) from e
            except httpx.RequestError as e:
                last_exception = e

            if attempt < self.settings.max_retries - 1:
                wait_time = self.backoff_seconds * 2**attempt
                logger.warning(
                    "%s %s failed (attempt %d/%d): %s; retrying in %.1fs",
                    method,
                    url,
                    attempt + 1,
                    self.settings.max_retries,
                    last_exception,
                    wait_time,
                )
                time.sleep(wait_time)

        raise ClientError(
            f"Failed after {self.settings.max_retries} attempts: {last_exception}",
            self.name,
        )

    def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """HTTP GET with retry."""
        return self._request_with_retry("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> httpx.Response:
        """HTTP POST with retry."""
        return self._request_with_retry("POST", url, **kwargs)
