# Cookie-only credential store: the signed token itself travels in the cookie.
# Created: 2026-10-12

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import Response

from repogate.credentials.cookies import clear_cookie, set_http_only_cookie
from repogate.credentials.protocol import Credential
from repogate.security.signing import sign_value, unsign_value

TOKEN_COOKIE = "gh_token"


class CookieCredentialStore:
    """Stateless store: nothing is kept on the server.

    The cookie is http-only and signed, so scripts cannot read it and forged
    values are rejected. Anyone holding a copy of the cookie can still use the
    token until the signature expires or the token is revoked on GitHub.
    Logout only clears the browser's cookie.
    """

    name = "cookie"

    def __init__(self, secret: str, ttl_seconds: int = 86400, secure: bool = False):
        self.secret = secret
        self.ttl_seconds = ttl_seconds
        self.secure = secure

    def issue(self, response: Response, credential: Credential) -> None:
        set_http_only_cookie(
            response,
            TOKEN_COOKIE,
            sign_value(self.secret, credential.token, self.ttl_seconds),
            max_age=self.ttl_seconds,
            secure=self.secure,
        )

    def load(self, request: Request) -> Credential | None:
        token = unsign_value(self.secret, request.cookies.get(TOKEN_COOKIE))
        if not token:
            return None
        return Credential(token=token)

    def revoke(self, request: Request, response: Response) -> None:
        clear_cookie(response, TOKEN_COOKIE, secure=self.secure)
