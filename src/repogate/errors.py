# Error taxonomy shared by the OAuth flow, the upstream client and the routes.
# Created: 2026-10-12

from __future__ import annotations

from typing import Any


class RepoGateError(Exception):
    """Base class for repogate errors."""


class ConfigurationError(RepoGateError):
    """Settings are unusable; raised before the server accepts traffic."""


class AuthenticationError(RepoGateError):
    """The OAuth login could not complete.

    ``reason`` is ``"denied"`` when the allow-list rejected the identity and
    ``"error"`` for everything else (state mismatch, exchange failure...).
    """

    def __init__(self, message: str, reason: str = "error"):
        super().__init__(message)
        self.reason = reason


class UnauthorizedRequest(RepoGateError):
    """A protected route was called without a usable credential."""

    def __init__(self, message: str = "Unauthorized. Please log in via /auth/github"):
        super().__init__(message)


class BadRequestError(RepoGateError):
    """A write request is missing a field or carries an invalid value."""


class UpstreamError(RepoGateError):
    """GitHub answered with a non-2xx status. Status and body are relayed as is."""

    def __init__(self, status_code: int, body: Any):
        super().__init__(f"GitHub API returned {status_code}")
        self.status_code = status_code
        self.body = body


class TransportError(RepoGateError):
    """No HTTP response was received from GitHub at all."""
