# Credential store protocol: where a caller's GitHub token lives between requests.
# Created: 2026-10-12

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from starlette.requests import Request
from starlette.responses import Response

from repogate.github.models import Identity


@dataclass(frozen=True)
class Credential:
    """A GitHub access token bound to one browser session."""

    token: str
    identity: Identity | None = None


class CredentialStoreProtocol(Protocol):
    """Protocol for credential storage strategies.

    ``issue`` is only ever called after the allow-list admitted the identity.
    """

    name: str

    def issue(self, response: Response, credential: Credential) -> None:
        """Bind *credential* to the browser receiving *response*."""
        ...

    def load(self, request: Request) -> Credential | None:
        """Return the caller's credential, or None when absent or invalid."""
        ...

    def revoke(self, request: Request, response: Response) -> None:
        """Invalidate the caller's credential and clear its cookie."""
        ...
