"""Unit test fixtures shared across bounded contexts."""

import json

import httpx
import pytest

from catalog.domain.value_objects import EntityCatalog, TenantSummary, UserSummary


def envelope(data=None, code: int = 0, msg: str = "success") -> dict:
    """Build a platform response envelope."""
    return {"code": code, "msg": msg, "data": data}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served.

    ``routes`` maps ``(METHOD, path)`` to either a ``(status, body)`` pair
    or a callable receiving the request.
    """

    def __init__(self, routes: dict):
        self.routes = routes
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json=envelope(code=404, msg="no route"))
        route = self.routes[key]
        if callable(route):
            return route(request)
        status_code, body = route
        return httpx.Response(status_code, json=body)

    def bodies(self, method: str, path: str) -> list[dict]:
        return [
            json.loads(request.content)
            for request in self.requests
            if request.method == method and request.url.path == path
        ]


@pytest.fixture
def catalog() -> EntityCatalog:
    """Catalog with two users, two tenants and a small vocabulary."""
    return EntityCatalog(
        users=(
            UserSummary(id="u1", name="Alice"),
            UserSummary(id="u2", name="Bob"),
        ),
        tenants=(
            TenantSummary(id="t1", name="Acme"),
            TenantSummary(id="t2", name="Globex"),
        ),
        objects=("project", "package", "release"),
        actions=("read", "write", "delete"),
    )


@pytest.fixture
def make_envelope():
    """Factory for platform response envelopes."""
    return envelope


@pytest.fixture
def make_transport():
    """Factory for RecordingTransport instances."""
    return RecordingTransport
