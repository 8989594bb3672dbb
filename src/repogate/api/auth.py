# Auth router: GitHub OAuth login, callback, logout.
# Created: 2026-10-12

from __future__ import annotations

import hmac
import logging
import secrets

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, RedirectResponse

from repogate.api.deps import (
    get_allow_list,
    get_credential_store,
    get_oauth,
    get_settings,
)
from repogate.api.errors import login_failure_redirect
from repogate.credentials import Credential
from repogate.credentials.cookies import clear_cookie, set_http_only_cookie
from repogate.errors import AuthenticationError
from repogate.security.signing import sign_value, unsign_value

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])

STATE_COOKIE = "gh.oauth_state"
STATE_TTL_SECONDS = 600


@router.get("/auth/github")
@router.get("/auth/provider", include_in_schema=False)
async def login(request: Request):
    """Redirect the browser to GitHub's authorization page."""
    settings = get_settings(request)
    state = secrets.token_urlsafe(24)

    response = RedirectResponse(get_oauth(request).authorize_url(state), status_code=302)
    set_http_only_cookie(
        response,
        STATE_COOKIE,
        sign_value(settings.session_secret, state, STATE_TTL_SECONDS),
        max_age=STATE_TTL_SECONDS,
        secure=settings.cookie_secure,
    )
    return response


@router.get("/auth/github/callback")
@router.get("/auth/provider/callback", include_in_schema=False)
async def callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
):
    """Finish the OAuth flow: exchange the code, check the allow-list, store the token."""
    settings = get_settings(request)
    try:
        credential = await _complete_login(request, code, state, error)
    except AuthenticationError as exc:
        response = login_failure_redirect(exc)
    else:
        response = RedirectResponse("/", status_code=302)
        get_credential_store(request).issue(response, credential)
        logger.info("Login succeeded for %s", credential.identity.username)

    clear_cookie(response, STATE_COOKIE, secure=settings.cookie_secure)
    return response


async def _complete_login(
    request: Request,
    code: str | None,
    state: str | None,
    error: str | None,
) -> Credential:
    if error:
        raise AuthenticationError(f"GitHub returned error: {error}")

    expected = unsign_value(get_settings(request).session_secret, request.cookies.get(STATE_COOKIE))
    if not state or not expected or not hmac.compare_digest(state.encode(), expected.encode()):
        raise AuthenticationError("OAuth state mismatch")
    if not code:
        raise AuthenticationError("Missing authorization code")

    oauth = get_oauth(request)
    token = await oauth.exchange_code(code)
    identity = await oauth.fetch_identity(token)

    # Nothing may be stored before this check.
    if not get_allow_list(request).is_allowed(identity):
        raise AuthenticationError(f"User {identity.username!r} is not allowed", reason="denied")

    return Credential(token=token, identity=identity)


@router.post("/logout")
async def logout(request: Request):
    """Drop the caller's credential and clear its cookie."""
    response = JSONResponse(content={"ok": True})
    get_credential_store(request).revoke(request, response)
    return response
