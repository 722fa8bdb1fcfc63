"""Authentication schema definitions."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, constr

from inquiro.models.base import UserRole
from inquiro.schemas.base import BaseSchema


PasswordStr = constr(min_length=8, max_length=128)
EmailLike = constr(pattern=r"[^@\s]+@[^@\s]+\.[^@\s]+", min_length=5, max_length=255)
NameStr = constr(min_length=1, max_length=120)


class RegisterRequest(BaseModel):
    """Payload for creating a new account."""

    email: EmailLike
    password: PasswordStr
    name: NameStr
    role: UserRole = UserRole.RESPONDENT


class LoginRequest(BaseModel):
    email: EmailLike
    password: str


class RefreshRequest(BaseModel):
    refresh_token: Optional[str] = None


class LogoutRequest(BaseModel):
    refresh_token: Optional[str] = None


class UserOut(BaseSchema):
    user_id: UUID
    email: str
    name: str
    role: UserRole
    created_at: datetime
    last_login_date: Optional[datetime] = None


class AuthTokenResponse(BaseSchema):
    """Standard response containing JWT credentials."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserOut
