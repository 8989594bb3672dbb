# Shared FastAPI dependencies: app-state accessors and the credential guard.
# Created: 2026-10-12

from __future__ import annotations

from fastapi import Request

from repogate.config import Settings
from repogate.credentials import Credential, CredentialStoreProtocol
from repogate.errors import UnauthorizedRequest
from repogate.github.client import GitHubClient
from repogate.github.oauth import GitHubOAuth
from repogate.security.allowlist import AllowList


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_github(request: Request) -> GitHubClient:
    return request.app.state.github


def get_oauth(request: Request) -> GitHubOAuth:
    return request.app.state.oauth


def get_allow_list(request: Request) -> AllowList:
    return request.app.state.allow_list


def get_credential_store(request: Request) -> CredentialStoreProtocol:
    return request.app.state.credential_store


async def require_credential(request: Request) -> Credential:
    """Reject the request unless the caller holds a stored GitHub token.

    Runs before the route body, so a rejected request never reaches GitHub.
    The credential is also exposed as ``request.state.credential``.
    """
    credential = get_credential_store(request).load(request)
    if credential is None or not credential.token:
        raise UnauthorizedRequest()
    request.state.credential = credential
    return credential


async def guard_admin(request: Request) -> None:
    """Apply :func:`require_credential` to admin routes when ``protect_admin`` is set."""
    if get_settings(request).protect_admin:
        await require_credential(request)
