"""Shared fixtures for the onboard test suite."""

import asyncio
import json
from typing import Any, Callable, Dict, List

import httpx
import pytest
import pytest_asyncio

from onboard.client.navigation.navigator import Navigator
from onboard.client.state.store import Store
from onboard.shared.core.event_bus import EventBus
from onboard.shared.core.service_registry import set_session_store
from onboard.shared.domain.session.session_store import MemorySessionStore
from onboard.shared.infrastructure.auth.client import AuthServiceClient

BASE_URL = "http://auth.test/api/v1"
API_PREFIX = "/api/v1"

_NO_CONTENT = object()


class FakeSleep:
    """Stand-in for asyncio.sleep that records delays and returns at once."""

    def __init__(self) -> None:
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        await asyncio.sleep(0)


class FakeAuthService:
    """Scriptable authentication service behind httpx.MockTransport."""

    def __init__(self) -> None:
        self.routes: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def reply(self, path: str, status_code: int = 200, json: Any = None, content: Any = _NO_CONTENT) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if content is not _NO_CONTENT:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=json)

        self.routes[path] = handler

    def fail(self, path: str, exc_type: type = httpx.ConnectError, message: str = "connection refused") -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc_type(message, request=request)

        self.routes[path] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(API_PREFIX)
        handler = self.routes.get(path)
        if handler is None:
            return httpx.Response(404, json={"detail": "Not Found"})
        return handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def bodies(self) -> List[Any]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def navigator(event_bus, fake_sleep):
    return Navigator(event_bus, sleep=fake_sleep)


@pytest.fixture
def session_store():
    store = MemorySessionStore()
    set_session_store(store)
    yield store
    set_session_store(None)


@pytest.fixture
def auth_service():
    return FakeAuthService()


@pytest_asyncio.fixture
async def auth_client(auth_service):
    client = AuthServiceClient(BASE_URL, timeout=2.0, transport=auth_service.transport)
    yield client
    await client.aclose()


@pytest.fixture(autouse=True)
def reset_store():
    Store.reset()
    yield
    Store.reset()
