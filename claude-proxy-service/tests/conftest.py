"""Shared fixtures: the app wired to a stub upstream instead of api.anthropic.com."""

import inspect
from collections.abc import Awaitable, Callable, Iterator

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.routers.proxy import get_anthropic_client
from app.services.anthropic_client import AnthropicClient
from main import create_app

UPSTREAM_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"

Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


class StubUpstream:
    """Mock transport handler that records every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Handler = lambda request: httpx.Response(200, json={"id": "msg_1"})

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.handler(request)
        if inspect.isawaitable(response):
            response = await response
        return response


@pytest.fixture
def stub_upstream() -> StubUpstream:
    return StubUpstream()


@pytest.fixture
def upstream_timeout() -> float:
    return 5.0


@pytest.fixture
def anthropic_client(stub_upstream: StubUpstream, upstream_timeout: float) -> AnthropicClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(stub_upstream))
    return AnthropicClient(
        http_client,
        url=UPSTREAM_URL,
        anthropic_version=ANTHROPIC_VERSION,
        timeout_seconds=upstream_timeout,
    )


@pytest.fixture
def app(anthropic_client: AnthropicClient) -> FastAPI:
    app = create_app()
    app.dependency_overrides[get_anthropic_client] = lambda: anthropic_client
    return app


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
