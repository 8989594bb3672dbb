# Session-backed credential store: tokens stay server-side, the browser holds a session id.
# Created: 2026-10-12

from __future__ import annotations

import logging
import secrets
import time
from dataclasses import dataclass

from starlette.requests import Request
from starlette.responses import Response

from repogate.credentials.cookies import clear_cookie, set_http_only_cookie
from repogate.credentials.protocol import Credential
from repogate.security.signing import sign_value, unsign_value

logger = logging.getLogger(__name__)

SESSION_COOKIE = "gh.sid"


@dataclass
class _Entry:
    credential: Credential
    expires_at: float


class SessionCredentialStore:
    """In-memory session store keyed by a random, signed session id.

    Logging out deletes the server-side entry, so a copied cookie stops
    working at once. Sessions do not survive a process restart.
    """

    name = "session"

    def __init__(self, secret: str, ttl_seconds: int = 86400, secure: bool = False):
        self.secret = secret
        self.ttl_seconds = ttl_seconds
        self.secure = secure
        self._sessions: dict[str, _Entry] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def issue(self, response: Response, credential: Credential) -> None:
        sid = secrets.token_urlsafe(32)
        self._sessions[sid] = _Entry(credential, time.time() + self.ttl_seconds)
        set_http_only_cookie(
            response,
            SESSION_COOKIE,
            sign_value(self.secret, sid, self.ttl_seconds),
            max_age=self.ttl_seconds,
            secure=self.secure,
        )
        self._purge_expired()

    def load(self, request: Request) -> Credential | None:
        sid = unsign_value(self.secret, request.cookies.get(SESSION_COOKIE))
        if sid is None:
            return None

        entry = self._sessions.get(sid)
        if entry is None:
            return None
        if entry.expires_at < time.time():
            self._sessions.pop(sid, None)
            return None
        if not entry.credential.token:
            return None
        return entry.credential

    def revoke(self, request: Request, response: Response) -> None:
        sid = unsign_value(self.secret, request.cookies.get(SESSION_COOKIE))
        if sid is not None and self._sessions.pop(sid, None) is not None:
            logger.info("Session revoked")
        clear_cookie(response, SESSION_COOKIE, secure=self.secure)

    def _purge_expired(self) -> None:
        now = time.time()
        for sid in [s for s, e in self._sessions.items() if e.expires_at < now]:
            del self._sessions[sid]
