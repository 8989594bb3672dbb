# Shared fixtures: settings, a fake GitHub behind httpx.MockTransport, logged-in clients.
# Created: 2026-10-12

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from urllib.parse import parse_qs, urlparse

import httpx
import pytest
from fastapi.testclient import TestClient

from repogate.api.serve import create_app
from repogate.config import Settings

TEST_TOKEN = "gho_testtoken123"

ALICE = {
    "id": 1001,
    "login": "alice",
    "name": "Alice Example",
    "avatar_url": "https://avatars.example/u/1001",
}

Handler = Callable[[httpx.Request], httpx.Response]


class FakeGitHub:
    """Records every upstream request and answers from a per-route table.

    Routes are keyed by (method, path); the host is ignored so OAuth
    (github.com) and REST (api.github.com) calls share one table.
    Unknown routes answer 404 like GitHub does.
    """

    def __init__(self, user: dict[str, Any] | None = None, token: str = TEST_TOKEN):
        self.calls: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], Handler] = {}
        self.user = user or dict(ALICE)
        self.token = token
        self.add("POST", "/login/oauth/access_token", {"access_token": token, "token_type": "bearer"})
        self.add("GET", "/user", lambda request: httpx.Response(200, json=self.user))

    def add(self, method: str, path: str, answer: Any, status_code: int = 200) -> None:
        if callable(answer):
            self.routes[(method, path)] = answer
        else:
            self.routes[(method, path)] = lambda request: httpx.Response(status_code, json=answer)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls_to(self, method: str, path: str) -> list[httpx.Request]:
        return [c for c in self.calls if c.method == method and c.url.path == path]

    def api_calls(self) -> list[httpx.Request]:
        """Calls made after login (everything except the OAuth handshake)."""
        return [c for c in self.calls if c.url.host == "api.github.com"]

    def reset(self) -> None:
        self.calls.clear()


def login(client: TestClient, code: str = "test-code"):
    """Drive the OAuth redirect + callback through *client*. Returns the callback response."""
    resp = client.get("/auth/github", follow_redirects=False)
    state = parse_qs(urlparse(resp.headers["location"]).query)["state"][0]
    return client.get(
        "/auth/github/callback",
        params={"code": code, "state": state},
        follow_redirects=False,
    )


@pytest.fixture
def make_settings():
    def _make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "github_client_id": "test-client-id",
            "github_client_secret": "test-client-secret",
            "session_secret": "test-session-secret-0123456789",
            "_env_file": None,
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def settings(make_settings):
    return make_settings()


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def make_client(make_settings, fake_github):
    def _make(**overrides: Any) -> TestClient:
        app = create_app(make_settings(**overrides), transport=fake_github.transport)
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def authed_client(client, fake_github):
    resp = login(client)
    assert resp.status_code == 302
    assert resp.headers["location"] == "/"
    fake_github.reset()
    return client
