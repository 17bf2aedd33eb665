from pydantic import BaseModel, EmailStr
from typing import List, Optional, Any


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str


class CurrentUserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    created_at: Optional[Any] = None
    roles: List[str] = []
    is_admin: bool = False
