"""
Custom exception handlers for FastAPI.

Every error body has the shape ``{"detail": str, "status_code": int}``;
validation failures add ``errors: [{"field", "message"}]``.

Security:
- Request IDs are logged server-side for tracing but NOT exposed to clients
- Generic error messages for 500 errors to prevent information disclosure
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError
from starlette.exceptions import HTTPException as StarletteHTTPException

from devconnector.constants import MSG_CONCURRENT_UPDATE, MSG_SERVER_ERROR
from devconnector.exceptions import DevConnectorError
from devconnector.logging import get_logger

logger = get_logger("backend.errors")

VALUE_ERROR_PREFIX = "Value error, "


class PayloadValidationError(Exception):
    """A request body failed schema validation on a route with its own status code."""

    def __init__(self, errors: list[dict[str, Any]], status_code: int = 422):
        self.errors = errors
        self.status_code = status_code
        super().__init__("Validation error")

    @classmethod
    def from_pydantic(cls, exc: ValidationError, status_code: int = 422) -> "PayloadValidationError":
        return cls(format_validation_errors(exc.errors()), status_code)


def format_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic error dicts into ``{field, message}`` pairs."""
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        message = str(error.get("msg", ""))
        if message.startswith(VALUE_ERROR_PREFIX):
            message = message[len(VALUE_ERROR_PREFIX):]
        formatted.append({"field": ".".join(loc) or "body", "message": message})
    return formatted


def _get_request_id() -> str:
    """Current request ID from the logging context, for server-side logs only."""
    return structlog.contextvars.get_contextvars().get("request_id", "-")


def _response_payload(detail: str, status_code: int) -> dict:
    return {
        "detail": detail,
        "status_code": status_code,
    }


def _validation_response(errors: list[dict[str, str]], status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            **_response_payload("Validation error", status_code),
            "errors": errors,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(
            "http_exception",
            detail=exc.detail,
            status_code=exc.status_code,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_response_payload(str(exc.detail), exc.status_code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = format_validation_errors(list(exc.errors()))
        logger.warning("validation_error", errors=errors, request_id=_get_request_id())
        return _validation_response(errors, 422)

    @app.exception_handler(PayloadValidationError)
    async def payload_validation_handler(request: Request, exc: PayloadValidationError):
        logger.warning(
            "validation_error",
            errors=exc.errors,
            status_code=exc.status_code,
            request_id=_get_request_id(),
        )
        return _validation_response(exc.errors, exc.status_code)

    @app.exception_handler(DevConnectorError)
    async def domain_exception_handler(request: Request, exc: DevConnectorError):
        logger.warning(
            "domain_error",
            error_type=type(exc).__name__,
            detail=exc.message,
            status_code=exc.status_code,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_response_payload(exc.message, exc.status_code),
        )

    @app.exception_handler(StaleDataError)
    @app.exception_handler(IntegrityError)
    async def conflict_handler(request: Request, exc: Exception):
        logger.warning(
            "concurrent_modification",
            error_type=type(exc).__name__,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=409,
            content=_response_payload(MSG_CONCURRENT_UPDATE, 409),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=500,
            content=_response_payload(MSG_SERVER_ERROR, 500),
        )
