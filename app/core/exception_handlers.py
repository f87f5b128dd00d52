"""
Centralized exception handlers.

Every failure leaves the API in the same envelope::

    {"status": "fail" | "error", "message": "..."}

``"fail"`` for 4xx, ``"error"`` for 5xx. Operational errors (``AppError``)
keep their own status and message; anything unexpected becomes a 500 with a
generic message and is logged with its traceback.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import AppError, ErrorKind, ValidationFailedError
from app.validation import format_validation_errors

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Something went very wrong!"


def _status_label(status_code: int) -> str:
    return "fail" if 400 <= status_code < 500 else "error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": _status_label(status_code), "message": message},
    )


def _app_error_response(request: Request, exc: AppError) -> JSONResponse:
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    if exc.kind in (ErrorKind.UNAUTHENTICATED, ErrorKind.TOKEN_EXPIRED):
        level = logging.INFO
    logger.log(
        level,
        "%s %s -> %s %s: %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.kind.value,
        exc.message,
    )
    return error_response(exc.status_code, exc.message)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the application."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return _app_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        error = ValidationFailedError(format_validation_errors(exc.errors()))
        return _app_error_response(request, error)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        message = str(exc.detail)
        if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
            message = f"Can't find {request.url.path} on this server!"
        logger.warning(
            "%s %s -> %s: %s", request.method, request.url.path, exc.status_code, message
        )
        response = error_response(exc.status_code, message)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception on %s %s: %s", request.method, request.url.path, exc
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR_MESSAGE
        )
