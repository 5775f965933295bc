"""API routes mounted under settings.API_PREFIX."""

from fastapi import APIRouter

from artshop.api import auth, health, password_reset

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(password_reset.router, prefix="/password-reset", tags=["password-reset"])
