"""Mapping of domain errors onto HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from forum.domain.error import (
    DomainError,
    DuplicateVoteError,
    InvalidVoteTypeError,
    NotAuthorizedError,
    NotFoundError,
    StoreUnavailableError,
)

# Most specific first; Starlette resolves handlers along the exception's MRO
ERROR_STATUS: dict[type[DomainError], int] = {
    InvalidVoteTypeError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    NotAuthorizedError: status.HTTP_403_FORBIDDEN,
    DuplicateVoteError: status.HTTP_409_CONFLICT,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    DomainError: status.HTTP_400_BAD_REQUEST,
}


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a domain error as a JSON error response."""
    status_code = next(
        code for error, code in ERROR_STATUS.items() if isinstance(exc, error)
    )
    if status_code >= 500:
        logfire.error(
            "Request failed", path=request.url.path, error=str(exc), status=status_code
        )
    else:
        logfire.warn(
            "Request rejected",
            path=request.url.path,
            error=str(exc),
            status=status_code,
        )
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain error handlers on the application."""
    for error in ERROR_STATUS:
        app.add_exception_handler(error, domain_error_handler)
