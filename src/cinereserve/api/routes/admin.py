"""Admin endpoints for user management."""

from fastapi import APIRouter, Depends

from cinereserve.api.deps import get_accounts, require_roles
from cinereserve.models import Role
from cinereserve.schemas import MessageResponse, RoleUpdateRequest, SessionUser, UsersResponse
from cinereserve.services.accounts import AccountService

router = APIRouter()

require_admin = require_roles(Role.ADMIN.value)


@router.get("/admin/users", response_model=UsersResponse)
async def list_users(
    _: SessionUser = Depends(require_admin),
    accounts: AccountService = Depends(get_accounts),
) -> UsersResponse:
    users = await accounts.list_users()
    return UsersResponse(count=len(users), data=users)


@router.put("/admin/users/{user_id}/role", response_model=MessageResponse)
async def update_user_role(
    user_id: str,
    request: RoleUpdateRequest,
    admin: SessionUser = Depends(require_admin),
    accounts: AccountService = Depends(get_accounts),
) -> MessageResponse:
    """
    Change a user's role.

    Admins cannot demote themselves. The new role takes effect at the
    user's next login.
    """
    await accounts.change_role(admin, user_id, request.role)
    return MessageResponse(message="User role updated successfully")
