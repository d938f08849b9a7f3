"""
Global error handling for the FastAPI application.
Domain exceptions become JSON errors with a stable code; anything else is a 500.
"""

import logging
import traceback
from typing import Any, Dict
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from timesheets.config import settings
from timesheets.domain.models.base import DomainException, ValidationError

logger = logging.getLogger(__name__)


STATUS_BY_CODE = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "AUTHORIZATION_ERROR": status.HTTP_403_FORBIDDEN,
    "ENTITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "BUSINESS_RULE_VIOLATION": 422,
    "TRANSIENT_ERROR": status.HTTP_503_SERVICE_UNAVAILABLE,
}

ERROR_BY_CODE = {
    "VALIDATION_ERROR": "Bad Request",
    "AUTHORIZATION_ERROR": "Forbidden",
    "ENTITY_NOT_FOUND": "Not Found",
    "CONFLICT": "Conflict",
    "BUSINESS_RULE_VIOLATION": "Unprocessable Entity",
    "TRANSIENT_ERROR": "Service Unavailable",
}


def error_content(exc: DomainException) -> Dict[str, Any]:
    """JSON body {error, message, code, field?} for a domain exception."""
    content: Dict[str, Any] = {
        "error": ERROR_BY_CODE.get(exc.code, "Bad Request"),
        "message": exc.message,
        "code": exc.code,
    }
    field = getattr(exc, "field", None)
    if field:
        content["field"] = field
    return content


def domain_error_response(exc: DomainException) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST),
        content=error_content(exc),
    )


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    if exc.code == "TRANSIENT_ERROR":
        logger.warning(f"{request.method} {request.url.path}: {exc.message}")
    return domain_error_response(exc)


async def request_validation_handler(request: Request, exc) -> JSONResponse:
    """Malformed payloads and query filters share the validation error shape."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]

    content = error_content(ValidationError(first.get("msg", "Invalid request"), ".".join(location) or None))
    content["details"] = [
        {"loc": [str(part) for part in e.get("loc", ())], "msg": e.get("msg")}
        for e in errors
    ]
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain and request validation handlers."""
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PydanticValidationError, request_validation_handler)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle all uncaught exceptions and format error responses.
    """

    async def dispatch(self, request: Request, call_next):
        """
        Process the request and handle any exceptions.
        """
        try:
            response = await call_next(request)
            return response
        except DomainException as exc:
            return domain_error_response(exc)
        except Exception as exc:
            return await self.handle_exception(request, exc)

    async def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        """
        Log the failure with its traceback and answer 500.
        """
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            exc_info=True,
            extra={
                "request_path": request.url.path,
                "request_method": request.method,
                "client_host": request.client.host if request.client else None
            }
        )

        error_response: Dict[str, Any] = {
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }

        if hasattr(request.state, "request_id"):
            error_response["request_id"] = request.state.request_id

        # In development, add more debug information
        if settings.debug:
            error_response["debug"] = {
                "exception_type": type(exc).__name__,
                "traceback": traceback.format_exc().split("\n")
            }

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response
        )
