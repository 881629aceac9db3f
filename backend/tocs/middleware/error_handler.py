from __future__ import annotations

import logging
import traceback

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from tocs.api.envelope import err
from tocs.config.settings import get_settings

logger = logging.getLogger(__name__)


def _format_validation_error(exc: RequestValidationError) -> str:
    """Turn Pydantic validation errors into a readable message."""
    parts = []
    for err_entry in exc.errors():
        loc = err_entry.get("loc", ())
        loc_str = ".".join(str(x) for x in loc if x != "body")
        msg = err_entry.get("msg", "Validation error")
        parts.append(f"{loc_str}: {msg}" if loc_str else msg)
    return "; ".join(parts) or "Request validation failed"


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return request validation failures as 400 in the app envelope format."""
    message = _format_validation_error(exc)
    logger.warning("Validation error on %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(
        status_code=400,
        content=err(message).model_dump(),
    )


class ServiceError(Exception):
    """Raise from the service layer for known user-facing errors."""

    status_code = 400


class NotFoundError(ServiceError):
    """Missing resource, or a caller whose role may not see or change it."""

    status_code = 404


class UnauthorizedError(ServiceError):
    status_code = 401


class RequestFailedError(ServiceError):
    """An outbound test call could not be completed."""

    status_code = 500


def full_error_message(exc: Exception) -> str:
    """Return full exception details including traceback."""
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).strip()


def internal_error_message(exc: Exception) -> str:
    if get_settings().app_env == "dev":
        return full_error_message(exc)
    return "Internal server error"


def error_response(exc: Exception, db: Session | None = None) -> JSONResponse:
    """Map a service-layer exception onto its status bucket, rolling back pending writes."""
    if db is not None:
        db.rollback()
    if isinstance(exc, ServiceError):
        return JSONResponse(status_code=exc.status_code, content=err(str(exc)).model_dump())
    if isinstance(exc, ValueError):
        return JSONResponse(status_code=400, content=err(str(exc)).model_dump())
    logger.exception("Unhandled service error")
    return JSONResponse(status_code=500, content=err(internal_error_message(exc)).model_dump())


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=err(str(exc)).model_dump(),
    )


async def catch_all_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error in %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=err(internal_error_message(exc)).model_dump(),
    )
