"""Map service exceptions to HTTP responses."""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from volunteerhub.core.exceptions import (
    AccountLockedError,
    AuthenticationError,
    InvalidInputError,
    NotFoundError,
    StateError,
    WaiverRequestExpiredError,
    WaiverRequiredError,
)
from volunteerhub.core.logging_config import get_logger

logger = get_logger(__name__)


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc), "errors": exc.errors})


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def state_error_handler(request: Request, exc: StateError) -> JSONResponse:
    if isinstance(exc, WaiverRequestExpiredError):
        return JSONResponse(status_code=410, content={"detail": str(exc)})
    if isinstance(exc, WaiverRequiredError):
        return JSONResponse(
            status_code=409,
            content={
                "detail": str(exc),
                "code": "waiver_required",
                "waiver_state": exc.waiver_state.value,
            },
        )
    return JSONResponse(status_code=409, content={"detail": str(exc)})


async def authentication_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    if isinstance(exc, AccountLockedError):
        return JSONResponse(
            status_code=429,
            content={"detail": str(exc)},
            headers={"Retry-After": str(exc.retry_after_seconds)},
        )
    return JSONResponse(status_code=401, content={"detail": str(exc)})


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("database_error", error=str(exc), exception_type=type(exc).__name__)
    return JSONResponse(
        status_code=503,
        content={"detail": "The database is temporarily unavailable, please retry"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidInputError, invalid_input_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(StateError, state_error_handler)
    app.add_exception_handler(AuthenticationError, authentication_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
