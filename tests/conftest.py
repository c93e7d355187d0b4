# tests/conftest.py
from __future__ import annotations

from typing import Any, Callable, Optional, Union

import httpx
import pytest

from payloads import BASE_URL
from stayease.auth import Identity
from stayease.main import StayEaseApp, create_app
from stayease.schemas import Role

Handler = Callable[[httpx.Request], httpx.Response]


class FakeBackend:
    """
    Route table in front of httpx.MockTransport.
    Routes are keyed on (METHOD, path); query strings are ignored for matching.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Union[httpx.Response, Handler]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        *,
        status: int = 200,
        json: Any = None,
        content: Optional[bytes] = None,
        handler: Optional[Handler] = None,
    ) -> None:
        if handler is not None:
            self.routes[(method, path)] = handler
        elif content is not None:
            self.routes[(method, path)] = httpx.Response(status, content=content)
        else:
            self.routes[(method, path)] = httpx.Response(status, json=json)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": f"no route {request.method} {request.url.path}"})
        if callable(route):
            return route(request)
        # Response objects are single-use once read; hand out copies
        return httpx.Response(route.status_code, content=route.content, headers=route.headers)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def tenant() -> Identity:
    return Identity(user_id=7, full_name="Tina Tenant", email="tina@t.local", role=Role.TENANT)


@pytest.fixture
def owner() -> Identity:
    return Identity(user_id=3, full_name="Oscar Owner", email="oscar@t.local", role=Role.OWNER)


@pytest.fixture
def make_app(backend: FakeBackend) -> Callable[..., StayEaseApp]:
    def _make(identity: Optional[Identity] = None) -> StayEaseApp:
        app = create_app(base_url=BASE_URL, transport=backend.transport(), restore_session=False)
        if identity is not None:
            app.session.login(identity)
        return app

    return _make
