from fastapi import APIRouter, Depends, Request
from taplist.core.dependencies import get_current_user, get_current_token, get_user_roles, get_auth_service
from taplist.core.rate_limit import limiter, login_rate_limit
from taplist.database.supabase_client import get_supabase, get_auth_client
from taplist.modules.auth.schemas import LoginRequest, TokenResponse, CurrentUserResponse
from taplist.modules.auth.service import AuthService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


def get_login_service(
    supabase: Client = Depends(get_supabase),
    auth_client: Client = Depends(get_auth_client)
) -> AuthService:
    return AuthService(supabase, auth_client)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(login_rate_limit)
async def login(
    request: Request,
    login_data: LoginRequest,
    service: AuthService = Depends(get_login_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and revoke the session"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=CurrentUserResponse)
async def me(
    current_user: Dict = Depends(get_current_user),
    supabase: Client = Depends(get_supabase),
):
    """Current authenticated user and roles (for the management console)."""
    roles = get_user_roles(current_user["id"], supabase)
    return CurrentUserResponse(
        id=current_user["id"],
        email=current_user.get("email"),
        created_at=current_user.get("created_at"),
        roles=roles,
        is_admin="admin" in roles,
    )
