"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Sign-up form. Presence of required fields is re-checked by AuthService."""

    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., max_length=255, description="Display username (unique)")
    email: str = Field(..., max_length=255, description="Login email (unique, case-insensitive)")
    password: str = Field(..., max_length=128, description="Password (at most 72 UTF-8 bytes)")
    security_question: str = Field(
        ..., alias="securityQuestion", description="One of the fixed security questions"
    )
    security_answer: str = Field(
        ..., alias="securityAnswer", max_length=255, description="Answer to the security question"
    )
    full_name: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., max_length=255, description="Login email")
    password: str = Field(..., max_length=128, description="Password (at most 72 UTF-8 bytes)")


class UserPublic(BaseModel):
    """Account fields safe to return to clients (no password or answer hashes)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    full_name: str | None = None
    phone: str | None = None
    role: str
    created_at: datetime | None = None


class AuthResponse(BaseModel):
    """Returned by register and login: the account plus a session token."""

    success: bool = True
    message: str
    user: UserPublic
    token: str = Field(..., description="JWT; send back in the x-auth-token header")


class CurrentUser(BaseModel):
    """Identity decoded from a verified token (id, email, role)."""

    id: int
    email: str
    role: str


class MeResponse(BaseModel):
    success: bool = True
    user: CurrentUser


class UsersListResponse(BaseModel):
    """Response for GET /auth/users (admin only)."""

    success: bool = True
    users: list[UserPublic]
