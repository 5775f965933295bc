"""Register/login routes and auth dependencies (get_current_user, require_role, require_admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from artshop.core.database import get_db
from artshop.core.errors import ForbiddenRoleError, NoTokenError
from artshop.core.security import ROLE_ADMIN, decode_access_token
from artshop.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    MeResponse,
    RegisterRequest,
    UserPublic,
    UsersListResponse,
)
from artshop.services.auth_service import AuthService
from artshop.services.user_store import UserStore

TOKEN_HEADER = "x-auth-token"

router = APIRouter()
token_header = APIKeyHeader(name=TOKEN_HEADER, auto_error=False)


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    return UserStore(db)


def get_auth_service(store: Annotated[UserStore, Depends(get_user_store)]) -> AuthService:
    return AuthService(store)


def get_current_user(
    token: Annotated[str | None, Depends(token_header)],
) -> CurrentUser:
    """
    Dependency: require a valid token in the x-auth-token header.

    Identity and role come from the token claims only; no database lookup.
    Raises NoTokenError, TokenExpiredError or InvalidTokenError (all 401).
    """
    if not token:
        raise NoTokenError()
    claims = decode_access_token(token)
    return CurrentUser(id=claims.user_id, email=claims.email, role=claims.role)


def require_role(current_user: CurrentUser, role: str) -> CurrentUser:
    """Raise ForbiddenRoleError (403) unless the caller holds the given role."""
    if current_user.role != role:
        raise ForbiddenRoleError()
    return current_user


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    return require_role(current_user, ROLE_ADMIN)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """
    Create an account (role 'user') with a mandatory security question.
    Returns the account and a JWT to send as the x-auth-token header.
    """
    result = service.register(
        username=body.username,
        email=body.email,
        password=body.password,
        security_question=body.security_question,
        security_answer=body.security_answer,
        full_name=body.full_name,
        phone=body.phone,
    )
    return AuthResponse(
        message="User registered successfully",
        user=UserPublic.model_validate(result.user),
        token=result.token,
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Authenticate with email and password; returns the account and a JWT."""
    result = service.login(email=body.email, password=body.password)
    return AuthResponse(
        message="Login successful",
        user=UserPublic.model_validate(result.user),
        token=result.token,
    )


@router.get("/me", response_model=MeResponse)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MeResponse:
    """Return the identity carried by the caller's token."""
    return MeResponse(user=current_user)


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    store: Annotated[UserStore, Depends(get_user_store)],
) -> UsersListResponse:
    """List all accounts (admin only)."""
    return UsersListResponse(
        users=[UserPublic.model_validate(u) for u in store.list_all()]
    )
