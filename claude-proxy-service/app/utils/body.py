"""Inbound request parsing for the relay endpoint.

Runs as FastAPI dependencies so that oversized or malformed requests are
rejected before the endpoint body, and therefore before any upstream call.
"""

import json
import math
from typing import Any

from fastapi import Header, Request

from app.utils.errors import MalformedBodyError, MissingApiKeyError, PayloadTooLargeError
from config import settings


async def require_api_key(x_api_key: str | None = Header(default=None)) -> str:
    """Return the caller's API key, rejecting requests without one."""
    if x_api_key is None or not x_api_key.strip():
        raise MissingApiKeyError()
    return x_api_key


def _reject_constant(name: str) -> Any:
    # json.loads accepts NaN and Infinity, which are not JSON and cannot be re-serialized
    raise MalformedBodyError(f"Invalid JSON body: {name} is not valid JSON")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise MalformedBodyError(f"Invalid JSON body: {text} is out of range")
    return value


async def read_json_body(request: Request) -> Any:
    """Read the request body under the configured size limit and decode it as JSON."""
    limit = settings.max_body_bytes

    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError(limit)

    chunks: list[bytes] = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise PayloadTooLargeError(limit)
        chunks.append(chunk)

    raw = b"".join(chunks)
    if not raw.strip():
        raise MalformedBodyError("Request body must be a JSON document")

    try:
        return json.loads(raw, parse_constant=_reject_constant, parse_float=_parse_finite_float)
    except ValueError as exc:
        raise MalformedBodyError(f"Invalid JSON body: {exc}") from exc
