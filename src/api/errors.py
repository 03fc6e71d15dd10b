"""Map domain errors and framework errors onto enveloped HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.envelope import envelope
from domain.model.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
    StoreError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first; DomainError is the catch-all
STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ConflictError, status.HTTP_409_CONFLICT),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (StoreError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (DomainError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(exc: DomainError) -> int:
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        logger.error("Request failed", extra={"path": request.url.path, "error": str(exc)})
        message = "Service unavailable" if isinstance(exc, StoreError) else "Internal server error"
    else:
        message = str(exc)
    return JSONResponse(status_code=code, content=envelope(None, message, code))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope(None, str(exc.detail), exc.status_code),
        headers=getattr(exc, 'headers', None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    code = 422
    # drop the rejected input so passwords are never echoed back
    errors = jsonable_encoder([
        {k: v for k, v in err.items() if k in ('loc', 'msg', 'type')}
        for err in exc.errors()
    ])
    return JSONResponse(status_code=code, content=envelope(errors, "Validation failed", code))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
