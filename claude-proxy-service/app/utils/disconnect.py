"""Cancel a pending upstream call when the caller hangs up."""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any, TypeVar

from fastapi import Request

logger = logging.getLogger("claude_proxy.disconnect")

T = TypeVar("T")


async def wait_for_disconnect(request: Request, poll_seconds: float) -> None:
    """Return once the ASGI server reports that the client disconnected."""
    while not await request.is_disconnected():
        await asyncio.sleep(poll_seconds)


async def call_unless_disconnected(
    request: Request, call: Coroutine[Any, Any, T], poll_seconds: float
) -> T | None:
    """Await ``call`` while watching the inbound connection.

    Returns the call's result, or ``None`` if the caller disconnected first,
    in which case the call has been cancelled. Exceptions raised by the call
    propagate unchanged.
    """
    call_task = asyncio.create_task(call)
    watch_task = asyncio.create_task(wait_for_disconnect(request, poll_seconds))
    try:
        await asyncio.wait({call_task, watch_task}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (call_task, watch_task):
            if not task.done():
                task.cancel()
        await asyncio.gather(call_task, watch_task, return_exceptions=True)

    if call_task.cancelled():
        logger.warning("Caller disconnected, upstream call cancelled")
        return None
    return call_task.result()
