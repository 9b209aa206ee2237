"""Claude Proxy Service - FastAPI Application Entry Point

Relays Anthropic Messages API calls for browser clients (a Figma plugin)
that cannot call the API directly, adding permissive CORS headers to every
response.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.routers import health, preflight, proxy
from app.services.anthropic_client import AnthropicClient
from app.utils.errors import RelayError, error_response
from config import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger("claude_proxy")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager owning the shared upstream HTTP client."""
    # Startup
    logger.info(
        "Starting Claude Proxy Service",
        extra={"environment": settings.environment, "port": settings.port},
    )
    logger.info(f"Server running on port {settings.port}")
    logger.info(f"Started at: {datetime.now(timezone.utc).isoformat()}")
    logger.info(f"Upstream: {settings.upstream_url}")
    logger.info(f"Upstream timeout: {settings.upstream_timeout_seconds}s")

    async with httpx.AsyncClient(timeout=settings.upstream_timeout) as http_client:
        app.state.anthropic_client = AnthropicClient(
            http_client,
            url=settings.upstream_url,
            anthropic_version=settings.anthropic_version,
            timeout_seconds=settings.upstream_timeout_seconds,
        )
        yield

    # Shutdown
    logger.info("Shutting down Claude Proxy Service")


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    """Client input errors detected before the upstream call."""
    logger.warning(
        f"Rejected request: {exc.message}",
        extra={"path": request.url.path, "status_code": exc.status_code},
    )
    return error_response(exc.status_code, exc.message)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Routing errors (unknown method/path) in the common error shape."""
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Typed route parameters that fail validation, as a 400 in the common error shape.

    No current route declares such a parameter; this keeps any future one from
    answering with FastAPI's 422 body, which lacks the `error` field.
    """
    return error_response(400, f"Invalid request: {exc.errors()}")


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for unhandled errors.

    Reports the error's message to the caller, so a failing request still gets
    a CORS-decorated JSON response. The traceback is not logged here: Starlette
    re-raises after this handler and the ASGI server logs it.
    """
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra={
            "path": request.url.path,
            "method": request.method,
        },
    )
    return error_response(500, str(exc) or "Internal server error")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Claude Proxy Service",
        description="CORS-enabled relay for the Anthropic Messages API",
        version=__version__,
        lifespan=lifespan,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None,
    )

    app.add_exception_handler(RelayError, relay_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(health.router)
    app.include_router(proxy.router)
    # Catch-all OPTIONS route, registered last
    app.include_router(preflight.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
