"""Exception handlers: structured JSON envelopes for every failure."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from utils import config
from utils.errors import AppError, AuthError, ValidationError

LOG = logging.getLogger(__name__)

# Request sections FastAPI prefixes to error locations; not part of the field path.
_LOC_SECTIONS = {"body", "query", "path", "header", "cookie"}


def _field_path(loc: tuple) -> str:
    parts = [str(p) for p in loc if not (isinstance(p, str) and p in _LOC_SECTIONS)]
    return ".".join(parts) if parts else (str(loc[0]) if loc else "body")


def _clean_message(msg: str) -> str:
    # pydantic prefixes messages raised from custom validators.
    return msg.removeprefix("Value error, ")


def request_validation_to_app_error(exc: RequestValidationError) -> ValidationError:
    """Convert FastAPI's request validation failure into a ValidationError listing offending fields."""
    errors = [
        {"field": _field_path(tuple(e.get("loc", ()))), "message": _clean_message(e.get("msg", "Invalid value"))}
        for e in exc.errors()
    ]
    return ValidationError("Validation failed", errors)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await app_error_handler(request, request_validation_to_app_error(exc))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors (unknown path, wrong method) in the {message} envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the full error; echo its message only outside production."""
    LOG.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "message": "An unexpected error occurred",
            "error": None if config.is_production() else str(exc),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
