"""Application factory and uvicorn runner.

``create_app`` wires the configured collaborators (GitHub client, OAuth flow,
allow-list, credential store) onto ``app.state`` once, so route handlers never
read module-level globals.
"""

from __future__ import annotations

import logging

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from repogate import __version__
from repogate.config import Settings, get_settings
from repogate.credentials import build_credential_store
from repogate.errors import ConfigurationError
from repogate.github.client import GitHubClient
from repogate.github.oauth import GitHubOAuth

logger = logging.getLogger(__name__)

_LOCAL_ORIGIN_REGEX = r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$"


def create_app(
    settings: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Loaded configuration; read from the environment when omitted.
        transport: Optional httpx transport for every upstream call (tests).
    """
    from repogate.api import admin, auth, repos
    from repogate.api.errors import install_error_handlers

    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="GitHub OAuth login and allow-listed repository proxy.",
        version=__version__,
    )

    github = GitHubClient(
        base_url=settings.github_api_url,
        app_name=settings.app_name,
        api_version=settings.github_api_version,
        timeout=settings.upstream_timeout,
        transport=transport,
    )
    app.state.settings = settings
    app.state.github = github
    app.state.oauth = GitHubOAuth(
        github,
        client_id=settings.github_client_id,
        client_secret=settings.github_client_secret,
        redirect_uri=settings.callback_url,
        scopes=settings.scopes,
        github_url=settings.github_url,
    )
    app.state.allow_list = settings.build_allow_list()
    app.state.credential_store = build_credential_store(settings)

    # --- CORS -----------------------------------------------------------
    if settings.home_page:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[settings.home_page.rstrip("/")],
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "OPTIONS"],
            allow_headers=["Content-Type"],
        )
    else:
        app.add_middleware(
            CORSMiddleware,
            allow_origin_regex=_LOCAL_ORIGIN_REGEX,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "OPTIONS"],
            allow_headers=["Content-Type"],
        )

    install_error_handlers(app)

    app.include_router(auth.router)
    app.include_router(repos.router)
    app.include_router(admin.router)

    @app.get("/health", include_in_schema=False)
    async def health():
        return {"status": "ok"}

    # Static front-end last so it never shadows an API route.
    static_dir = settings.static_path
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    elif settings.static_dir is not None:
        raise ConfigurationError(f"STATIC_DIR does not exist: {static_dir}")

    logger.info(
        "%s ready (credential store: %s, allow-list: %s)",
        settings.app_name,
        app.state.credential_store.name,
        ", ".join(app.state.allow_list.members) or "disabled",
    )
    return app


def run_server(settings: Settings, app: FastAPI | None = None, dev: bool = False) -> None:
    """Start uvicorn on ``settings.host:settings.port``.

    In dev mode uvicorn imports the factory itself so it can reload; *app* is ignored.
    """
    import uvicorn

    if dev:
        uvicorn.run(
            "repogate.api.serve:create_app",
            factory=True,
            host=settings.host,
            port=settings.port,
            reload=True,
            log_level="debug",
        )
    else:
        uvicorn.run(app or create_app(settings), host=settings.host, port=settings.port)
