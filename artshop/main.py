"""FastAPI application entrypoint. No business logic; only wiring, middleware and error envelopes."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from artshop.api import router as api_router
from artshop.api.auth import TOKEN_HEADER
from artshop.core.config import settings
from artshop.core.errors import ArtshopError, ValidationFailedError
from artshop.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Artshop Auth API",
    version="0.1.0",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", TOKEN_HEADER],
)


def _error_response(status_code: int, message: str, code: str) -> JSONResponse:
    body = ErrorResponse(message=message, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(ArtshopError)
async def artshop_error_handler(request: Request, exc: ArtshopError) -> JSONResponse:
    return _error_response(exc.status_code, exc.message, exc.code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Missing or ill-typed JSON fields are a 400, like any other input error."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{field}: {first.get('msg', 'invalid value')}" if field else first.get("msg", "")
    else:
        message = ValidationFailedError.default_message
    return _error_response(
        status.HTTP_400_BAD_REQUEST, message, ValidationFailedError.code
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Datastore or hashing failures: log with traceback, answer a generic 500."""
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ArtshopError.default_message,
        ArtshopError.code,
    )


app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Artshop Auth API"}
