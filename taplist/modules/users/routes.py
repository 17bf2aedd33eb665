from fastapi import APIRouter, Depends, HTTPException, Request
from taplist.config import settings
from taplist.core.dependencies import require_admin
from taplist.database.supabase_client import get_supabase
from taplist.modules.users.schemas import (
    ManageUsersRequest, AdminRoleUpdate, AdminRoleResponse
)
from taplist.modules.users.service import UserAdminService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/manage-users", tags=["users"])


def get_user_admin_service(supabase: Client = Depends(get_supabase)) -> UserAdminService:
    return UserAdminService(supabase)


def password_reset_redirect(request: Request) -> str:
    origin = request.headers.get("origin") or settings.site_url
    return f"{origin.rstrip('/')}{settings.password_reset_path}"


@router.post("")
async def manage_users(
    body: ManageUsersRequest,
    request: Request,
    user_data: Dict = Depends(require_admin),
    service: UserAdminService = Depends(get_user_admin_service)
):
    """List users, create an account or send a password reset (admin only)"""
    if body.action == "list":
        return service.list_users()

    if body.action == "create":
        if not body.email or not body.password:
            raise HTTPException(status_code=400, detail="Email and password required")
        return service.create_user(body.email, body.password, body.make_admin)

    if body.action == "reset-password":
        if not body.email:
            raise HTTPException(status_code=400, detail="Email required")
        return service.send_password_reset(body.email, password_reset_redirect(request))

    raise HTTPException(status_code=400, detail="Invalid action")


@router.put("/{user_id}/admin", response_model=AdminRoleResponse)
async def set_admin_role(
    user_id: str,
    role_update: AdminRoleUpdate,
    user_data: Dict = Depends(require_admin),
    service: UserAdminService = Depends(get_user_admin_service)
):
    """Grant or revoke the admin role (admin only)"""
    return service.set_admin(user_id, role_update.is_admin)
