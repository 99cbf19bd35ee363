"""Utilities for translating domain errors to HTTP responses."""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from ormkit.domain.exceptions import (
    DomainError,
    ModelStateError,
    ModelValidationError,
    NotFoundError,
    RelationshipError,
    ValidationError,
)


def to_http(exc: DomainError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=exc.message)
    if isinstance(exc, (RelationshipError, ModelStateError)):
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)


def register_exception_handlers(app: FastAPI) -> None:
    """Install JSON handlers for domain errors on ``app``."""

    @app.exception_handler(ModelValidationError)
    async def model_validation_handler(request: Request, exc: ModelValidationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.message, "errors": exc.messages},
        )

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        http_exc = to_http(exc)
        return JSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})
