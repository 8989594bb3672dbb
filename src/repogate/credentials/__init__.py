"""Credential stores: where the caller's GitHub token is kept between requests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from repogate.credentials.cookie_store import CookieCredentialStore
from repogate.credentials.protocol import Credential, CredentialStoreProtocol
from repogate.credentials.session_store import SessionCredentialStore

if TYPE_CHECKING:
    from repogate.config import Settings

__all__ = [
    "Credential",
    "CredentialStoreProtocol",
    "CookieCredentialStore",
    "SessionCredentialStore",
    "build_credential_store",
]


def build_credential_store(settings: Settings) -> CredentialStoreProtocol:
    """Instantiate the strategy named by ``settings.credential_store``."""
    cls = CookieCredentialStore if settings.credential_store == "cookie" else SessionCredentialStore
    return cls(
        secret=settings.session_secret,
        ttl_seconds=settings.session_ttl_seconds,
        secure=settings.cookie_secure,
    )
