# Admin router: allow-list introspection.
# Created: 2026-10-12
#
# Open by default, as the original deployment exposed it; PROTECT_ADMIN=true
# puts it behind the same credential check as /api.

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from repogate.api.deps import get_allow_list, guard_admin
from repogate.api.schemas.admin import AllowedUsersResponse

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(guard_admin)])


@router.get("/allowed-users", response_model=AllowedUsersResponse)
async def allowed_users(request: Request):
    """List the configured allow-list (lower-cased)."""
    allow_list = get_allow_list(request)
    return AllowedUsersResponse(allowedUsers=allow_list.members, enabled=allow_list.enabled)
