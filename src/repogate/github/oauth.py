# GitHub OAuth: authorization URL, code exchange, identity lookup.
# Created: 2026-10-12

from __future__ import annotations

import logging
import urllib.parse

import httpx
from pydantic import ValidationError

from repogate.errors import AuthenticationError, RepoGateError
from repogate.github.client import GitHubClient
from repogate.github.models import Identity

logger = logging.getLogger(__name__)


class GitHubOAuth:
    """Web application flow against ``{github_url}/login/oauth/*``.

    Supports:
    - Authorization URL generation
    - Code exchange for an access token
    - Resolving the token's identity through the REST API
    """

    def __init__(
        self,
        client: GitHubClient,
        client_id: str,
        client_secret: str,
        redirect_uri: str | None = None,
        scopes: list[str] | None = None,
        github_url: str = "https://github.com",
    ):
        self.client = client
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.scopes = scopes if scopes is not None else ["repo", "user"]
        self.github_url = github_url.rstrip("/")

    @property
    def token_url(self) -> str:
        return f"{self.github_url}/login/oauth/access_token"

    def authorize_url(self, state: str) -> str:
        """Build the URL the browser is redirected to.

        Args:
            state: Opaque value echoed back on the callback (CSRF check).
        """
        params = {
            "client_id": self.client_id,
            "scope": " ".join(self.scopes),
            "state": state,
        }
        if self.redirect_uri:
            params["redirect_uri"] = self.redirect_uri
        return f"{self.github_url}/login/oauth/authorize?{urllib.parse.urlencode(params)}"

    async def exchange_code(self, code: str) -> str:
        """Exchange an authorization code for an access token.

        GitHub reports a bad code with a 200 and an ``error`` field, so both
        shapes of failure end up as :class:`AuthenticationError`.
        """
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
        }
        if self.redirect_uri:
            data["redirect_uri"] = self.redirect_uri

        try:
            async with self.client.http_client() as http:
                resp = await http.post(
                    self.token_url,
                    data=data,
                    headers={"Accept": "application/json", "User-Agent": self.client.app_name},
                )
                resp.raise_for_status()
                payload = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise AuthenticationError(f"Token exchange failed: {e}") from e

        if not isinstance(payload, dict):
            raise AuthenticationError("Token exchange returned an unexpected response")
        if payload.get("error"):
            detail = payload.get("error_description") or payload["error"]
            raise AuthenticationError(f"Token exchange rejected: {detail}")

        token = payload.get("access_token")
        if not token:
            raise AuthenticationError("Token exchange returned no access_token")
        return token

    async def fetch_identity(self, token: str) -> Identity:
        """Resolve the profile the token belongs to via ``GET /user``."""
        try:
            data = await self.client.request(token, "GET", "/user")
            return Identity.model_validate(data)
        except (RepoGateError, ValidationError) as e:
            raise AuthenticationError(f"Could not load GitHub profile: {e}") from e
