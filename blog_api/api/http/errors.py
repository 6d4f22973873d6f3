"""Centralized error-to-HTTP mapping.

``error_response`` is the single point where a failure becomes a response.
Every error body has the shape ``{"message": <string>}``. Internal failures
are scrubbed to a generic message; their details only reach the logs.
"""

from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from blog_api.core.errors import ApiError, BadRequestError, ErrorKind
from blog_api.core.validation import describe_violation

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}

INTERNAL_MESSAGE = "Internal server error"


def _message_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"message": message}, headers=headers
    )


def error_response(exc: BaseException) -> JSONResponse:
    """Render any exception as a JSON error response.

    ``ApiError`` subclasses map through their kind. Anything else is treated
    as ``Internal``.
    """
    if isinstance(exc, ApiError) and exc.kind is not ErrorKind.INTERNAL:
        logger.warning("{}: {}", exc.kind.value, exc.message)
        return _message_response(STATUS_BY_KIND[exc.kind], exc.message)

    logger.opt(exception=exc).error("Internal error: {}", type(exc).__name__)
    return _message_response(STATUS_BY_KIND[ErrorKind.INTERNAL], INTERNAL_MESSAGE)


def describe_validation_error(errors: Sequence[Any]) -> str:
    """Human-readable message for the first request-parsing error."""
    if not errors:
        return "Invalid request"

    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Request body is not valid JSON"
    return describe_violation(first)


def register_error_handlers(app: FastAPI) -> None:
    """Register the error mapper for every exception type FastAPI dispatches.

    Exceptions without a registered handler are caught by the request
    logging middleware, which also delegates to ``error_response``.
    """

    @app.exception_handler(ApiError)
    async def handle_api_error(_request: Request, exc: ApiError) -> JSONResponse:
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return error_response(BadRequestError(describe_validation_error(exc.errors())))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        _request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _message_response(exc.status_code, str(exc.detail), exc.headers)

    @app.exception_handler(SQLAlchemyError)
    async def handle_persistence_error(
        _request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        return error_response(exc)
