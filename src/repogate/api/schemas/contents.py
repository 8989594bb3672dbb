# Contents write schemas.
# Created: 2026-10-12

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ContentEncoding = Literal["utf8", "base64"]


class FileWriteRequest(BaseModel):
    """Body of ``PUT /api/repos/{owner}/{repo}/contents/{path}``.

    ``contentEncoding`` says how ``content`` arrives: ``utf8`` text is
    base64-encoded before it is sent to GitHub, ``base64`` is forwarded as is.
    When omitted the server default applies (``utf8`` unless configured).
    """

    model_config = ConfigDict(populate_by_name=True)

    content: str
    message: str = "Update via API"
    branch: str | None = None
    sha: str | None = None
    committer: dict[str, Any] | None = None
    content_encoding: ContentEncoding | None = Field(default=None, alias="contentEncoding")


class SpecUpdateRequest(BaseModel):
    """Body of ``POST /api/repos/{owner}/{repo}/spec/update``."""

    model_config = ConfigDict(populate_by_name=True)

    content: str
    path: str = "spec.yaml"
    message: str = "Update spec via API"
    branch: str | None = None
    sha: str | None = None
    content_encoding: ContentEncoding | None = Field(default=None, alias="contentEncoding")
