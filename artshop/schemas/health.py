"""Pydantic schema for the health check response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus users-database reachability."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    service: str = Field(default="artshop-auth", description="Service name")
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Whether SELECT 1 succeeded against the users database",
    )
