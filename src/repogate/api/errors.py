# Exception handlers: render every failure as ``{"error": ...}``.
# Created: 2026-10-12

from __future__ import annotations

import logging
from urllib.parse import urlencode

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from repogate.errors import (
    AuthenticationError,
    BadRequestError,
    TransportError,
    UnauthorizedRequest,
    UpstreamError,
)

logger = logging.getLogger(__name__)

UNAUTHORIZED_PAGE = "/unauthorized.html"


def error_response(status_code: int, error, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error}, headers=headers)


def _describe_validation(exc: RequestValidationError) -> str:
    messages = []
    for err in exc.errors():
        if err.get("type") == "json_invalid":
            messages.append("Invalid JSON body")
            continue
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        if err.get("type") == "missing":
            messages.append(f"{field} is required")
        else:
            messages.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(messages) or "Invalid request"


async def _unauthorized(request: Request, exc: UnauthorizedRequest) -> JSONResponse:
    return error_response(401, str(exc))


async def _upstream(request: Request, exc: UpstreamError) -> JSONResponse:
    return error_response(exc.status_code, exc.body)


async def _transport(request: Request, exc: TransportError) -> JSONResponse:
    return error_response(500, str(exc))


async def _bad_request(request: Request, exc: BadRequestError) -> JSONResponse:
    return error_response(400, str(exc))


async def _validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(400, _describe_validation(exc))


def login_failure_redirect(exc: AuthenticationError) -> RedirectResponse:
    """Send the browser to the static unauthorized page; no session is created."""
    logger.warning("Login failed (%s): %s", exc.reason, exc)
    return RedirectResponse(
        f"{UNAUTHORIZED_PAGE}?{urlencode({'reason': exc.reason})}", status_code=302
    )


async def _authentication(request: Request, exc: AuthenticationError) -> RedirectResponse:
    return login_failure_redirect(exc)


async def _http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, exc.detail, headers=getattr(exc, "headers", None))


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UnauthorizedRequest, _unauthorized)
    app.add_exception_handler(UpstreamError, _upstream)
    app.add_exception_handler(TransportError, _transport)
    app.add_exception_handler(BadRequestError, _bad_request)
    app.add_exception_handler(AuthenticationError, _authentication)
    app.add_exception_handler(RequestValidationError, _validation)
    app.add_exception_handler(StarletteHTTPException, _http_exception)
