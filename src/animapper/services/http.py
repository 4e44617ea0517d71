"""Async HTTP access to the metadata, search and enrichment providers.

``ProviderHTTPClient`` owns one ``aiohttp.ClientSession`` and converts every
transport, status and decoding failure into an ``AnimapperNetworkError`` or
``AnimapperParsingError`` tagged with the provider's error code. Nothing is
retried here; callers decide how a failure affects their lookup.
"""

from __future__ import annotations

import asyncio
import logging
import time
from types import TracebackType
from typing import Any

import aiohttp
import orjson

from animapper.config.models.api_settings import APISettings
from animapper.shared.constants import HTTPStatusCodes
from animapper.shared.errors import (
    ErrorCode,
    create_api_error,
    create_parsing_error,
)
from animapper.shared.logging import log_api_call

logger = logging.getLogger(__name__)


class ProviderHTTPClient:
    """Shared aiohttp session with provider error mapping.

    The session is created lazily on first use and must be released with
    ``close()`` or by using the client as an async context manager.

    Args:
        settings: Provider API settings (timeout, headers)
    """

    def __init__(self, settings: APISettings | None = None) -> None:
        self.settings = settings or APISettings()
        self._session: aiohttp.ClientSession | None = None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self) -> ProviderHTTPClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create the HTTP session."""
        async with self._session_lock:
            if self._session is None or self._session.closed:
                self._session = aiohttp.ClientSession(
                    timeout=aiohttp.ClientTimeout(total=self.settings.timeout_seconds),
                    headers=self.settings.request_headers(),
                )
                logger.debug("aiohttp.ClientSession created")
            return self._session

    async def close(self) -> None:
        """Close the HTTP session if it is open."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
            logger.debug("aiohttp.ClientSession closed")
        self._session = None

    async def request_text(
        self,
        method: str,
        url: str,
        *,
        error_code: ErrorCode,
        operation: str,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        allow_not_found: bool = False,
    ) -> str | None:
        """Send a request and return the response body as text.

        Args:
            method: HTTP method
            url: Request URL
            error_code: Code attached to errors raised for this provider
            operation: Operation name for error context and logs
            params: Query string parameters
            json_body: JSON request body
            headers: Extra request headers
            allow_not_found: Return None instead of raising on 404

        Returns:
            Response text, or None for an allowed 404

        Raises:
            AnimapperNetworkError: On timeouts, connection errors and non-2xx statuses
        """
        session = await self.get_session()
        start = time.perf_counter()

        try:
            async with session.request(
                method,
                url,
                params=params,
                json=json_body,
                headers=headers,
            ) as response:
                duration_ms = (time.perf_counter() - start) * 1000
                log_api_call(
                    logger,
                    url,
                    method=method,
                    status_code=response.status,
                    duration_ms=duration_ms,
                )

                if allow_not_found and response.status == HTTPStatusCodes.NOT_FOUND:
                    return None

                if not HTTPStatusCodes.is_success(response.status):
                    raise create_api_error(
                        f"{method} {url} returned status {response.status}",
                        code=error_code,
                        url=url,
                        status=response.status,
                        operation=operation,
                    )

                return await response.text()

        except asyncio.TimeoutError as e:
            raise create_api_error(
                f"{method} {url} timed out after {self.settings.timeout_seconds}s",
                code=ErrorCode.API_TIMEOUT,
                url=url,
                operation=operation,
                original_error=e,
            ) from e
        except aiohttp.ClientError as e:
            raise create_api_error(
                f"{method} {url} failed: {e}",
                code=error_code,
                url=url,
                operation=operation,
                original_error=e,
            ) from e

    async def request_json(
        self,
        method: str,
        url: str,
        *,
        error_code: ErrorCode,
        operation: str,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        allow_not_found: bool = False,
    ) -> Any | None:
        """Send a request and decode the JSON response.

        Returns:
            Decoded JSON, or None for an allowed 404

        Raises:
            AnimapperNetworkError: On transport or status errors
            AnimapperParsingError: If the body is not valid JSON
        """
        text = await self.request_text(
            method,
            url,
            error_code=error_code,
            operation=operation,
            params=params,
            json_body=json_body,
            headers=headers,
            allow_not_found=allow_not_found,
        )
        if text is None:
            return None

        try:
            return orjson.loads(text)
        except orjson.JSONDecodeError as e:
            raise create_parsing_error(
                f"Invalid JSON from {url}: {e}",
                url=url,
                operation=operation,
                original_error=e,
            ) from e
