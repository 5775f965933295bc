"""Security-question recovery routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from artshop.api.auth import get_current_user, get_user_store
from artshop.core.errors import ForbiddenError
from artshop.core.security import ROLE_ADMIN
from artshop.schemas.auth import CurrentUser
from artshop.schemas.common import SuccessResponse
from artshop.schemas.password_reset import (
    ResetPasswordRequest,
    SecurityQuestionsResponse,
    UpdateSecurityQuestionRequest,
)
from artshop.services.password_reset import PasswordResetService, list_security_questions
from artshop.services.user_store import UserStore

logger = logging.getLogger(__name__)
router = APIRouter()


def get_password_reset_service(
    store: Annotated[UserStore, Depends(get_user_store)],
) -> PasswordResetService:
    return PasswordResetService(store)


@router.get("/security-questions", response_model=SecurityQuestionsResponse)
def get_security_questions() -> SecurityQuestionsResponse:
    """The fixed list of questions accepted at registration."""
    return SecurityQuestionsResponse(questions=list_security_questions())


@router.post("/reset-password", response_model=SuccessResponse)
def reset_password(
    body: ResetPasswordRequest,
    service: Annotated[PasswordResetService, Depends(get_password_reset_service)],
) -> SuccessResponse:
    """
    Reset a forgotten password. The question must be the one the account
    registered with; the answer is compared case- and whitespace-insensitively.
    """
    service.reset_password(
        email=body.email,
        security_question=body.security_question,
        security_answer=body.security_answer,
        new_password=body.new_password,
    )
    return SuccessResponse(message="Password reset successfully")


@router.post("/update-security-question", response_model=SuccessResponse)
def update_security_question(
    body: UpdateSecurityQuestionRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[PasswordResetService, Depends(get_password_reset_service)],
) -> SuccessResponse:
    """Set or replace the caller's recovery question (admins may act on any account)."""
    if current_user.id != body.user_id and current_user.role != ROLE_ADMIN:
        logger.warning(
            "Security question update denied",
            extra={"user_id": current_user.id, "target_user_id": body.user_id},
        )
        raise ForbiddenError("You can only update your own security question")
    service.update_security_question(
        user_id=body.user_id,
        security_question=body.security_question,
        security_answer=body.security_answer,
    )
    return SuccessResponse(message="Security question updated successfully")
