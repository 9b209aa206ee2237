"""Outbound client for the Anthropic Messages API."""

import asyncio
import logging
from typing import Any

import httpx

from app.models.upstream import (
    UpstreamNetworkFailure,
    UpstreamResponse,
    UpstreamResult,
    UpstreamTimeout,
    UpstreamUnreadable,
)

logger = logging.getLogger("claude_proxy.anthropic_client")


class AnthropicClient:
    """Forwards a caller's message request to the fixed upstream endpoint.

    Every call is bounded by ``timeout_seconds`` as a whole, not per socket
    operation. Outcomes are returned as ``UpstreamResult`` values; only
    programming errors escape as exceptions.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        url: str,
        anthropic_version: str,
        timeout_seconds: float,
    ) -> None:
        """Initialize with a shared HTTP client.

        Args:
            http_client: Shared httpx AsyncClient, owned by the app lifespan
            url: Upstream Messages API URL
            anthropic_version: Value sent as the ``anthropic-version`` header
            timeout_seconds: Upper bound on one complete upstream exchange
        """
        self._client = http_client
        self._url = url
        self._anthropic_version = anthropic_version
        self._timeout_seconds = timeout_seconds

    @property
    def timeout_seconds(self) -> float:
        return self._timeout_seconds

    def build_headers(self, api_key: str) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": api_key,
            "anthropic-version": self._anthropic_version,
        }

    async def send_message(self, api_key: str, payload: Any) -> UpstreamResult:
        """POST ``payload`` upstream with the caller's key.

        Args:
            api_key: The caller's ``x-api-key`` value, passed through unchanged
            payload: Decoded JSON body, re-serialized for the upstream request

        Returns:
            UpstreamResponse for any status the upstream answered with,
            UpstreamTimeout when the bound expires (the request is cancelled),
            UpstreamUnreadable when the body could not be read,
            UpstreamNetworkFailure when no response was obtained.
        """
        try:
            return await asyncio.wait_for(
                self._exchange(api_key, payload), timeout=self._timeout_seconds
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.error(
                "Anthropic API timeout",
                extra={"timeout_seconds": self._timeout_seconds, "url": self._url},
            )
            return UpstreamTimeout(timeout_seconds=self._timeout_seconds)
        except httpx.RequestError as exc:
            message = str(exc) or type(exc).__name__
            logger.error(
                f"Anthropic API unreachable: {message}",
                extra={"error_type": type(exc).__name__, "url": self._url},
            )
            return UpstreamNetworkFailure(message=message)

    async def _exchange(self, api_key: str, payload: Any) -> UpstreamResult:
        request = self._client.build_request(
            "POST", self._url, headers=self.build_headers(api_key), json=payload
        )
        response = await self._client.send(request, stream=True)
        try:
            try:
                content = await response.aread()
            except httpx.TimeoutException:
                raise
            except httpx.RequestError as exc:
                logger.error(
                    f"Failed to read Anthropic API response: {exc}",
                    extra={"status_code": response.status_code},
                )
                return UpstreamUnreadable(status_code=response.status_code)
        finally:
            await response.aclose()

        result = UpstreamResponse(
            status_code=response.status_code,
            content=content,
            content_type=response.headers.get("content-type", "application/json"),
        )
        if not result.is_success:
            logger.error(
                f"Anthropic API error: {response.status_code} - "
                f"{content.decode('utf-8', errors='replace')}",
                extra={"status_code": response.status_code},
            )
        return result
