# Tests for config.py
# Created: 2026-10-12

import pytest
from pydantic import ValidationError

from repogate.config import PACKAGE_STATIC_DIR, Settings
from repogate.credentials import (
    CookieCredentialStore,
    SessionCredentialStore,
    build_credential_store,
)


class TestSettings:
    def test_defaults(self, settings):
        assert settings.port == 3000
        assert settings.app_name == "repogate"
        assert settings.github_api_url == "https://api.github.com"
        assert settings.credential_store == "session"
        assert settings.default_content_encoding == "utf8"
        assert settings.protect_admin is False
        assert settings.scopes == ["repo", "user"]
        assert settings.session_ttl_seconds == 24 * 3600
        assert settings.static_path == PACKAGE_STATIC_DIR
        assert settings.upstream_timeout is None

    def test_missing_oauth_credentials_fail(self, monkeypatch):
        monkeypatch.delenv("GITHUB_CLIENT_ID", raising=False)
        monkeypatch.delenv("GITHUB_CLIENT_SECRET", raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_empty_client_secret_fails(self, make_settings):
        with pytest.raises(ValidationError):
            make_settings(github_client_secret="")

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_CLIENT_ID", "env-id")
        monkeypatch.setenv("GITHUB_CLIENT_SECRET", "env-secret")
        monkeypatch.setenv("ALLOWED_USERS", "Alice,bob")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("CREDENTIAL_STORE", "cookie")
        s = Settings(_env_file=None)
        assert s.github_client_id == "env-id"
        assert s.port == 8080
        assert s.credential_store == "cookie"
        assert s.build_allow_list().members == ["alice", "bob"]

    def test_random_session_secret_per_instance(self, monkeypatch):
        monkeypatch.delenv("SESSION_SECRET", raising=False)
        a = Settings(github_client_id="x", github_client_secret="y", _env_file=None)
        b = Settings(github_client_id="x", github_client_secret="y", _env_file=None)
        assert len(a.session_secret) == 64
        assert a.session_secret != b.session_secret

    @pytest.mark.parametrize(
        "environment,secure",
        [("production", True), ("Production", True), ("development", False), ("test", False)],
    )
    def test_cookie_secure(self, make_settings, environment, secure):
        assert make_settings(environment=environment).cookie_secure is secure

    def test_urls_lose_trailing_slash(self, make_settings):
        s = make_settings(github_api_url="https://ghe.example/api/v3/", github_url="https://ghe.example/")
        assert s.github_api_url == "https://ghe.example/api/v3"
        assert s.github_url == "https://ghe.example"

    def test_invalid_credential_store(self, make_settings):
        with pytest.raises(ValidationError):
            make_settings(credential_store="redis")


class TestBuildCredentialStore:
    def test_session_by_default(self, settings):
        store = build_credential_store(settings)
        assert isinstance(store, SessionCredentialStore)
        assert store.ttl_seconds == settings.session_ttl_seconds

    def test_cookie_strategy(self, make_settings):
        store = build_credential_store(make_settings(credential_store="cookie", environment="production"))
        assert isinstance(store, CookieCredentialStore)
        assert store.secure is True
