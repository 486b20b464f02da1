"""Translate service exceptions into HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shortlink.errors import GenerationExhausted, NotFound, StorageError, ValidationError

from .api.schemas import ErrorResponse

logger = logging.getLogger("shortlink.web")


def _error_response(status_code: int, error: str, detail: str = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, detail=detail).model_dump(),
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Turn the first body validation error into a short message."""
    for err in exc.errors():
        loc = err.get("loc", ())
        field = loc[-1] if loc else "body"
        if err.get("type") in ("missing", "string_too_short"):
            return f"{field} is required"
        if err.get("type") == "string_type":
            return f"{field} must be a string"
        return f"{field}: {err.get('msg', 'invalid value')}"
    return "Invalid request body"


def register_exception_handlers(app: FastAPI) -> None:
    """Register JSON error handlers on ``app``."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error_response(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return _error_response(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound):
        return _error_response(status.HTTP_404_NOT_FOUND, "Short URL not found", str(exc))

    @app.exception_handler(GenerationExhausted)
    async def generation_exhausted_handler(request: Request, exc: GenerationExhausted):
        logger.error(f"{request.method} {request.url.path}: {exc}")
        return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "Could not allocate a short ID", str(exc))

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"{request.method} {request.url.path}: {exc}")
        return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "Storage unavailable")
