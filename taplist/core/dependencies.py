"""
Core dependencies for route protection and admin checks
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from taplist.database.supabase_client import get_supabase
from taplist.modules.auth.service import AuthService
from supabase import Client
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

# auto_error off so a missing header is a 401 with our own message
security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Current user info from the JWT (admin or viewer)"""
    return auth_service.get_current_user(token)


def get_user_roles(user_id: str, supabase: Client) -> List[str]:
    """Roles from user_roles for one user"""
    try:
        result = supabase.table("user_roles")\
            .select("role")\
            .eq("user_id", user_id)\
            .execute()
        return sorted({r["role"] for r in result.data}) if result.data else []
    except Exception as e:
        logger.error(f"Error getting user roles: {e}")
        return []


def is_admin(user_id: str, supabase: Client) -> bool:
    """Admin membership check via the is_admin(_user_id) database function"""
    try:
        result = supabase.rpc("is_admin", {"_user_id": user_id}).execute()
        return bool(result.data)
    except Exception as e:
        logger.error(f"Error checking admin role: {e}")
        return False


def require_admin(
    user_data: dict = Depends(get_current_user),
    supabase: Client = Depends(get_supabase)
) -> dict:
    """Dependency to check the caller holds the admin role"""
    if not is_admin(user_data["id"], supabase):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return user_data
