"""Pydantic request/response schemas."""

from artshop.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    MeResponse,
    RegisterRequest,
    UserPublic,
    UsersListResponse,
)
from artshop.schemas.common import ErrorResponse, SuccessResponse
from artshop.schemas.health import HealthResponse
from artshop.schemas.password_reset import (
    ResetPasswordRequest,
    SecurityQuestionsResponse,
    UpdateSecurityQuestionRequest,
)

__all__ = [
    "AuthResponse",
    "CurrentUser",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "MeResponse",
    "RegisterRequest",
    "ResetPasswordRequest",
    "SecurityQuestionsResponse",
    "SuccessResponse",
    "UpdateSecurityQuestionRequest",
    "UserPublic",
    "UsersListResponse",
]
