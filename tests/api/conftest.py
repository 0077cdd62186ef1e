"""API test fixtures — isolated gateway app + fake upstream + httpx test client.

Invariants:
    - Every test gets a fresh app, so a fresh CharacterStore with ids from "1"
    - The upstream API is an httpx.MockTransport; no network is ever touched
    - fake_upstream.requests records every outbound request in order

Design Decisions:
    - Mock transport injected through create_app(): the real MarvelAPIClient
      code path (params, error mapping) is exercised end to end
"""

from typing import Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from marvel_gateway.config import Settings
from marvel_gateway.main import create_app

UPSTREAM_BASE_URL = "https://upstream.test"
TEST_API_KEY = "test-key"


class FakeUpstream:
    """Controllable stand-in for the upstream Marvel API."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={"count": 0, "results": []})
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)


@pytest.fixture
def fake_upstream():
    return FakeUpstream()


@pytest.fixture
def settings():
    return Settings(
        api_key=TEST_API_KEY,
        upstream_base_url=UPSTREAM_BASE_URL,
        cors_origins=["*"],
    )


@pytest.fixture
def gateway_app(settings, fake_upstream):
    return create_app(settings, upstream_transport=httpx.MockTransport(fake_upstream.handler))


@pytest.fixture
def store(gateway_app):
    return gateway_app.state.character_store


@pytest.fixture
async def client(gateway_app):
    """Gateway test client."""
    async with AsyncClient(
        transport=ASGITransport(app=gateway_app), base_url="http://test",
    ) as c:
        yield c
    await gateway_app.state.marvel_client.aclose()
