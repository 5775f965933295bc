"""Envelope schemas shared by every endpoint."""

from pydantic import BaseModel, Field


class SuccessResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Uniform error body produced by the app-level exception handlers."""

    success: bool = False
    message: str
    code: str = Field(description="Stable error code, e.g. INVALID_CREDENTIALS")
