from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Any

ADMIN_ROLE = "admin"
VIEWER_ROLE = "viewer"


class ManageUsersRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Validated in the route handler
    action: Optional[str] = None  # list | create | reset-password
    email: Optional[str] = None
    password: Optional[str] = None
    make_admin: bool = Field(False, alias="makeAdmin")


class ManagedUser(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: Optional[str] = None
    created_at: Optional[Any] = None
    roles: List[str] = []
    is_admin: bool = Field(False, alias="isAdmin")


class UserListResponse(BaseModel):
    users: List[ManagedUser]


class CreatedUserResponse(BaseModel):
    user: ManagedUser


class PasswordResetResponse(BaseModel):
    success: bool = True


class AdminRoleUpdate(BaseModel):
    is_admin: bool


class AdminRoleResponse(BaseModel):
    user_id: str
    is_admin: bool
    message: str
