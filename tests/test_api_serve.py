# Tests for api/serve.py: app factory wiring, static pages, CORS.
# Created: 2026-10-12

import pytest
from fastapi.testclient import TestClient

from repogate.api.serve import create_app
from repogate.credentials import CookieCredentialStore, SessionCredentialStore
from repogate.errors import ConfigurationError
from tests.conftest import login


class TestCreateApp:
    def test_state_wiring(self, make_settings):
        app = create_app(make_settings(allowed_users="alice"))
        assert app.state.allow_list.members == ["alice"]
        assert isinstance(app.state.credential_store, SessionCredentialStore)
        assert app.state.github.app_name == "repogate"
        assert app.state.oauth.client_id == "test-client-id"

    def test_cookie_store_selected(self, make_settings):
        app = create_app(make_settings(credential_store="cookie"))
        assert isinstance(app.state.credential_store, CookieCredentialStore)

    def test_app_name_used_as_user_agent(self, make_client, fake_github):
        client = make_client(app_name="spec-editor")
        login(client)
        fake_github.reset()
        client.get("/api/me")
        assert fake_github.calls[0].headers["user-agent"] == "spec-editor"

    def test_missing_static_dir_fails_fast(self, make_settings, tmp_path):
        with pytest.raises(ConfigurationError):
            create_app(make_settings(static_dir=tmp_path / "nope"))

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestStaticPages:
    def test_index(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert "text/html" in resp.headers["content-type"]

    def test_unauthorized_page(self, client):
        resp = client.get("/unauthorized.html")
        assert resp.status_code == 200
        assert "Not authorized" in resp.text

    def test_custom_static_dir(self, make_settings, tmp_path):
        (tmp_path / "index.html").write_text("<h1>custom</h1>")
        client = TestClient(create_app(make_settings(static_dir=tmp_path)))
        assert "custom" in client.get("/").text

    def test_unknown_path_uses_error_envelope(self, client):
        resp = client.get("/no/such/page")
        assert resp.status_code == 404
        assert "error" in resp.json()


class TestCORS:
    def test_home_page_origin_allowed(self, make_client):
        client = make_client(home_page="https://editor.example")
        resp = client.options(
            "/api/me",
            headers={
                "Origin": "https://editor.example",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert resp.headers["access-control-allow-origin"] == "https://editor.example"
        assert resp.headers["access-control-allow-credentials"] == "true"

    def test_other_origin_not_allowed(self, make_client):
        client = make_client(home_page="https://editor.example")
        resp = client.get("/health", headers={"Origin": "https://evil.example"})
        assert "access-control-allow-origin" not in resp.headers

    def test_localhost_allowed_without_home_page(self, client):
        resp = client.get("/health", headers={"Origin": "http://localhost:5173"})
        assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
