from supabase import Client
from taplist.config import settings
from taplist.modules.users.schemas import (
    ManagedUser, UserListResponse, CreatedUserResponse,
    PasswordResetResponse, AdminRoleResponse, ADMIN_ROLE
)
from typing import List, Dict, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class UserAdminService:
    """Privileged user administration through the Supabase Auth admin API"""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _require_service_role(self) -> None:
        if not settings.supabase_service_role_key:
            raise HTTPException(
                status_code=500,
                detail="Service role key not configured. Cannot manage users."
            )

    def _roles_by_user(self, user_ids: Optional[List[str]] = None) -> Dict[str, List[str]]:
        query = self.supabase.table("user_roles").select("user_id, role")
        if user_ids is not None:
            query = query.in_("user_id", user_ids)
        result = query.execute()
        out: Dict[str, List[str]] = {}
        for r in result.data or []:
            out.setdefault(r["user_id"], []).append(r["role"])
        return out

    @staticmethod
    def _to_managed_user(user, roles: List[str]) -> ManagedUser:
        return ManagedUser(
            id=user.id,
            email=user.email,
            created_at=user.created_at,
            roles=sorted(roles),
            is_admin=ADMIN_ROLE in roles,
        )

    def list_users(self) -> UserListResponse:
        """All auth users with their roles"""
        self._require_service_role()
        try:
            auth_users = self.supabase.auth.admin.list_users()
            roles = self._roles_by_user()
            return UserListResponse(users=[
                self._to_managed_user(u, roles.get(u.id, [])) for u in auth_users
            ])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error listing users: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def create_user(self, email: str, password: str, make_admin: bool = False) -> CreatedUserResponse:
        """Create a confirmed account, optionally with the admin role"""
        self._require_service_role()
        try:
            response = self.supabase.auth.admin.create_user({
                "email": email,
                "password": password,
                "email_confirm": True
            })
            if not response or not response.user:
                raise HTTPException(status_code=500, detail="Failed to create user")
            user = response.user

            roles: List[str] = []
            if make_admin:
                self.supabase.table("user_roles").insert({
                    "user_id": user.id,
                    "role": ADMIN_ROLE
                }).execute()
                roles.append(ADMIN_ROLE)

            logger.info(f"User created: {user.id} (admin={make_admin})")
            return CreatedUserResponse(user=self._to_managed_user(user, roles))
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise HTTPException(status_code=400, detail="User already exists")
            logger.error(f"Error creating user: {error_message}")
            raise HTTPException(status_code=500, detail=error_message)

    def send_password_reset(self, email: str, redirect_to: str) -> PasswordResetResponse:
        """Email a password reset link that lands on redirect_to"""
        try:
            self.supabase.auth.reset_password_for_email(email, {"redirect_to": redirect_to})
            logger.info(f"Password reset email requested (redirect {redirect_to})")
            return PasswordResetResponse(success=True)
        except Exception as e:
            logger.error(f"Error sending password reset: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def set_admin(self, user_id: str, is_admin: bool) -> AdminRoleResponse:
        """Grant or revoke the admin role; repeating a call changes nothing"""
        self._require_service_role()
        try:
            user_response = self.supabase.auth.admin.get_user_by_id(user_id)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=404, detail="User not found")
        except HTTPException:
            raise
        except Exception:
            raise HTTPException(status_code=404, detail="User not found")

        try:
            if is_admin:
                existing = self.supabase.table("user_roles")\
                    .select("id")\
                    .eq("user_id", user_id)\
                    .eq("role", ADMIN_ROLE)\
                    .execute()
                if not existing.data:
                    self.supabase.table("user_roles").insert({
                        "user_id": user_id,
                        "role": ADMIN_ROLE
                    }).execute()
                message = "Admin role granted"
            else:
                self.supabase.table("user_roles")\
                    .delete()\
                    .eq("user_id", user_id)\
                    .eq("role", ADMIN_ROLE)\
                    .execute()
                message = "Admin role removed"

            logger.info(f"{message} for user {user_id}")
            return AdminRoleResponse(user_id=user_id, is_admin=is_admin, message=message)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
