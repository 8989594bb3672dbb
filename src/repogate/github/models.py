# GitHub profile model used as the caller's identity.
# Created: 2026-10-12

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Identity(BaseModel):
    """The subset of GitHub's ``GET /user`` payload repogate relies on."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    login: str = ""
    name: str | None = None
    avatar_url: str | None = None

    @property
    def username(self) -> str:
        return self.login or self.name or ""
