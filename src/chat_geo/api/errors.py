"""Exception handlers that render every failure in the response envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from chat_geo.core.errors import ErrorKind, StoreError
from chat_geo.core.settings import settings
from chat_geo.schemas.common import failure

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _internal_message(detail: str) -> str:
    return detail if settings.expose_internal_errors else INTERNAL_ERROR_MESSAGE


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Map taxonomy errors onto their status codes."""
    message = exc.message
    if exc.kind is ErrorKind.INTERNAL:
        logger.error(
            "Internal error on %s %s: %s", request.method, request.url.path, message, exc_info=exc
        )
        message = _internal_message(message)
    return JSONResponse(status_code=exc.status_code, content=failure(message))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (auth failures, unknown routes) in the envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=failure(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed or missing fields as a 400 InvalidArgument."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=failure("; ".join(problems) or "Invalid request"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for unexpected exceptions."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=failure(_internal_message(str(exc))),
    )


def install_exception_handlers(app: FastAPI) -> None:
    """Register all envelope-producing handlers on ``app``."""
    app.add_exception_handler(StoreError, store_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
