"""Permissive CORS headers applied to every response the service produces."""

from collections.abc import Callable, Coroutine
from typing import Any

from fastapi import Request, Response
from fastapi.routing import APIRoute

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, x-api-key, anthropic-version, *",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
}


def apply_cors_headers(response: Response) -> Response:
    """Add the CORS header set to ``response`` in place and return it."""
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    return response


class CORSRoute(APIRoute):
    """Route class that decorates whatever its endpoint returns with CORS headers.

    Exceptions escaping the endpoint are decorated by the app's exception
    handlers instead, so both paths end in ``apply_cors_headers``.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_handler = super().get_route_handler()

        async def cors_route_handler(request: Request) -> Response:
            response = await original_handler(request)
            return apply_cors_headers(response)

        return cors_route_handler
