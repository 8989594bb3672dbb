# Admin schemas.
# Created: 2026-10-12

from __future__ import annotations

from pydantic import BaseModel


class AllowedUsersResponse(BaseModel):
    """Allow-list introspection."""

    allowedUsers: list[str]
    enabled: bool
