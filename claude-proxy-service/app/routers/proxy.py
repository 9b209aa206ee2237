"""Relay endpoint forwarding Messages API calls to Anthropic."""

import json
import logging
import time
from typing import Any

from fastapi import APIRouter, Depends, Request, Response

from app.models.upstream import (
    UpstreamNetworkFailure,
    UpstreamResponse,
    UpstreamResult,
    UpstreamTimeout,
    UpstreamUnreadable,
)
from app.services.anthropic_client import AnthropicClient
from app.utils.body import read_json_body, require_api_key
from app.utils.cors import CORSRoute
from app.utils.disconnect import call_unless_disconnected
from app.utils.errors import error_response
from config import settings

logger = logging.getLogger("claude_proxy.proxy")

router = APIRouter(route_class=CORSRoute, tags=["Proxy"])

# nginx convention for "client closed request"; nobody receives it
CLIENT_CLOSED_REQUEST = 499


def get_anthropic_client(request: Request) -> AnthropicClient:
    """Return the app-wide client created in the lifespan."""
    return request.app.state.anthropic_client


def build_relay_response(result: UpstreamResult) -> Response:
    """Map an upstream result to the response sent to the caller."""
    if isinstance(result, UpstreamResponse):
        # Forwarded as-is, including upstream error statuses such as 529
        return Response(
            content=result.content,
            status_code=result.status_code,
            media_type=result.content_type,
        )
    if isinstance(result, UpstreamTimeout):
        return error_response(504, result.message)
    if isinstance(result, UpstreamUnreadable):
        return error_response(500, result.message)
    if isinstance(result, UpstreamNetworkFailure):
        return error_response(500, result.message)
    raise TypeError(f"Unknown upstream result: {result!r}")


@router.post("/proxy")
async def proxy_message(
    request: Request,
    api_key: str = Depends(require_api_key),
    payload: Any = Depends(read_json_body),
    client: AnthropicClient = Depends(get_anthropic_client),
) -> Response:
    """Forward the JSON body and the caller's API key to the Messages API.

    The upstream status and body are returned unchanged. Local failures are
    reported as ``{"error": ...}``: 504 on timeout, 500 when the upstream is
    unreachable or its response cannot be read.
    """
    start = time.perf_counter()
    logger.info("Received proxy request")
    logger.info(f"Request size: {len(json.dumps(payload))} characters")

    result = await call_unless_disconnected(
        request,
        client.send_message(api_key, payload),
        poll_seconds=settings.disconnect_poll_seconds,
    )
    elapsed_ms = int((time.perf_counter() - start) * 1000)

    if result is None:
        logger.warning(
            f"Caller disconnected after {elapsed_ms}ms",
            extra={"status_code": CLIENT_CLOSED_REQUEST},
        )
        return Response(status_code=CLIENT_CLOSED_REQUEST)

    response = build_relay_response(result)
    if isinstance(result, UpstreamResponse) and result.is_success:
        logger.info(f"Request completed in {elapsed_ms}ms")
    else:
        logger.error(
            f"Proxy request failed in {elapsed_ms}ms",
            extra={"status_code": response.status_code, "result": type(result).__name__},
        )
    return response
