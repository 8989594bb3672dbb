# Settings: environment-driven configuration loaded once at startup.
# Created: 2026-10-12

from __future__ import annotations

import logging
import secrets
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from repogate.security.allowlist import AllowList

logger = logging.getLogger(__name__)

PACKAGE_STATIC_DIR = Path(__file__).parent / "static"


class Settings(BaseSettings):
    """repogate configuration.

    Every field maps to an upper-case environment variable of the same name
    (``GITHUB_CLIENT_ID``, ``ALLOWED_USERS``...). A ``.env`` file in the working
    directory is read too. The OAuth client id and secret are required, so a
    misconfigured process fails before it accepts traffic.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # GitHub OAuth app
    # ========================================
    github_client_id: str = Field(..., min_length=1, description="OAuth app client id")
    github_client_secret: str = Field(..., min_length=1, description="OAuth app client secret")
    callback_url: str | None = Field(
        default=None,
        description="Redirect URI registered with the OAuth app",
    )
    oauth_scopes: str = Field(
        default="repo user",
        description="Space-separated scopes requested at login",
    )

    # ========================================
    # Upstream API
    # ========================================
    github_api_url: str = Field(default="https://api.github.com")
    github_url: str = Field(
        default="https://github.com",
        description="Host serving /login/oauth/* (differs on GitHub Enterprise)",
    )
    github_api_version: str = Field(default="2022-11-28")
    upstream_timeout: float | None = Field(
        default=None, gt=0, description="Seconds; unset keeps httpx's own default"
    )

    # ========================================
    # Server
    # ========================================
    app_name: str = Field(default="repogate", description="Also sent upstream as User-Agent")
    home_page: str | None = Field(default=None, description="Front-end origin allowed by CORS")
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000, ge=1, le=65535)
    environment: str = Field(default="development")
    static_dir: Path | None = Field(default=None)
    log_level: str = Field(default="INFO")

    # ========================================
    # Sessions and access control
    # ========================================
    session_secret: str = Field(default_factory=lambda: secrets.token_hex(32), min_length=16)
    session_ttl_hours: int = Field(default=24, ge=1)
    credential_store: Literal["session", "cookie"] = Field(default="session")
    allowed_users: str = Field(default="", description="Comma-separated GitHub logins")
    protect_admin: bool = Field(
        default=False,
        description="Require a logged-in caller on /admin endpoints",
    )
    default_content_encoding: Literal["utf8", "base64"] = Field(default="utf8")

    @field_validator("github_api_url", "github_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper()

    @property
    def cookie_secure(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def session_ttl_seconds(self) -> int:
        return self.session_ttl_hours * 3600

    @property
    def scopes(self) -> list[str]:
        return self.oauth_scopes.split()

    @property
    def static_path(self) -> Path:
        return self.static_dir or PACKAGE_STATIC_DIR

    def build_allow_list(self) -> AllowList:
        """Parse ``allowed_users`` into the immutable gate used for logins."""
        return AllowList.from_config(self.allowed_users)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
