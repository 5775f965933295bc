"""Request/response schemas for security-question password reset."""

from pydantic import BaseModel, ConfigDict, Field


class SecurityQuestionsResponse(BaseModel):
    questions: list[str]


class ResetPasswordRequest(BaseModel):
    """Single-step reset: question, answer and the new password in one request."""

    model_config = ConfigDict(populate_by_name=True)

    email: str = Field(..., max_length=255)
    security_question: str = Field(..., alias="securityQuestion")
    security_answer: str = Field(..., alias="securityAnswer", max_length=255)
    new_password: str = Field(
        ..., alias="newPassword", max_length=128, description="At least 6 characters, at most 72 UTF-8 bytes"
    )


class UpdateSecurityQuestionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., alias="userId")
    security_question: str = Field(..., alias="securityQuestion")
    security_answer: str = Field(..., alias="securityAnswer", max_length=255)
