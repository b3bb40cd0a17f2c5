"""
Error handling middleware and exception handlers.

Every failure leaves the service in the same JSON envelope:

    {"error": {"code": ..., "message": ..., "path": ..., "method": ...}}
"""

import logging
import traceback
from typing import Any, Callable, Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from redis.exceptions import ConnectionError as RedisConnectionError, RedisError
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.exceptions import ServiceError

logger = logging.getLogger(__name__)


def get_safe_error_details(exc: Exception, include_details: bool = False) -> dict[str, Any]:
    """
    Extract error details for the response body.

    Args:
        exc: The exception to extract details from
        include_details: Whether to include the traceback (only in debug)

    Returns:
        Dictionary with error details
    """
    details = {
        "type": type(exc).__name__,
        "message": str(exc),
    }

    if include_details:
        details["traceback"] = traceback.format_exc()

    return details


def format_validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Flatten pydantic validation errors into field/message/type entries."""
    errors = []
    for error in exc.errors():
        errors.append({
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        })
    return errors


def error_body(
    code: str,
    message: str,
    path: str,
    method: str,
    details: Optional[Any] = None,
) -> dict[str, Any]:
    body = {
        "error": {
            "code": code,
            "message": message,
            "path": path,
            "method": method,
        }
    }
    if details is not None:
        body["error"]["details"] = details
    return body


class ErrorHandlingMiddleware:
    """
    Outermost ASGI middleware catching anything the exception handlers did not.

    Maps store and channel failures to their HTTP status and renders a
    structured error response.
    """

    def __init__(self, app: Callable, debug: bool = False):
        """
        Initialize error handling middleware.

        Args:
            app: The ASGI application
            debug: Whether to include detailed error information
        """
        self.app = app
        self.debug = debug

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        try:
            await self.app(scope, receive, send)
        except Exception as exc:
            response = await self._handle_exception(exc, scope)
            await response(scope, receive, send)

    async def _handle_exception(self, exc: Exception, scope: dict) -> Response:
        """
        Map an exception to a JSON error response.

        Args:
            exc: The exception to handle
            scope: ASGI scope for context

        Returns:
            JSONResponse with error details
        """
        request_path = scope.get("path", "unknown")
        request_method = scope.get("method", "unknown")

        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        error_code = "INTERNAL_SERVER_ERROR"
        message = "An unexpected error occurred"
        details = None

        if isinstance(exc, ServiceError):
            status_code = exc.status_code
            error_code = exc.error_code
            message = exc.message
            logger.warning(
                f"Service error: {request_method} {request_path} - "
                f"{error_code}: {message}"
            )

        elif isinstance(exc, StarletteHTTPException):
            status_code = exc.status_code
            error_code = "HTTP_EXCEPTION"
            message = str(exc.detail)
            logger.warning(
                f"HTTP exception: {request_method} {request_path} - "
                f"Status: {status_code}, Message: {message}"
            )

        elif isinstance(exc, RequestValidationError):
            status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
            error_code = "VALIDATION_ERROR"
            message = "Request validation failed"
            details = format_validation_errors(exc)
            logger.warning(
                f"Validation error: {request_method} {request_path} - "
                f"Errors: {details}"
            )

        elif isinstance(exc, IntegrityError):
            status_code = status.HTTP_409_CONFLICT
            error_code = "INTEGRITY_ERROR"
            message = "Database integrity constraint violated"
            if self.debug:
                details = get_safe_error_details(exc, include_details=True)
            logger.error(
                f"Database integrity error: {request_method} {request_path}",
                exc_info=not self.debug
            )

        elif isinstance(exc, OperationalError):
            status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            error_code = "DATABASE_ERROR"
            message = "Database service temporarily unavailable"
            logger.error(
                f"Database operational error: {request_method} {request_path}",
                exc_info=True
            )

        elif isinstance(exc, SQLAlchemyError):
            error_code = "DATABASE_ERROR"
            message = "A database error occurred"
            if self.debug:
                details = get_safe_error_details(exc, include_details=True)
            logger.error(
                f"SQLAlchemy error: {request_method} {request_path}",
                exc_info=not self.debug
            )

        elif isinstance(exc, RedisConnectionError):
            status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            error_code = "MESSAGE_BUS_UNAVAILABLE"
            message = "Message bus temporarily unavailable"
            logger.error(
                f"Redis connection error: {request_method} {request_path}",
                exc_info=True
            )

        elif isinstance(exc, RedisError):
            error_code = "MESSAGE_BUS_ERROR"
            message = "A message bus error occurred"
            if self.debug:
                details = get_safe_error_details(exc, include_details=True)
            logger.error(
                f"Redis error: {request_method} {request_path}",
                exc_info=not self.debug
            )

        else:
            if self.debug:
                details = get_safe_error_details(exc, include_details=True)
            logger.error(
                f"Unhandled exception: {request_method} {request_path} - "
                f"{type(exc).__name__}: {exc}",
                exc_info=True
            )

        error_response = error_body(error_code, message, request_path, request_method, details)

        if "headers" in scope:
            headers = dict(scope["headers"])
            request_id = headers.get(b"x-request-id")
            if request_id:
                error_response["error"]["request_id"] = request_id.decode()

        return JSONResponse(
            status_code=status_code,
            content=error_response,
        )


def setup_error_handlers(app: FastAPI) -> None:
    """
    Set up exception handlers for FastAPI application.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(ServiceError)
    async def service_exception_handler(request: Request, exc: ServiceError):
        """Handle domain errors raised by services, verification and the message bus."""
        log = logger.error if exc.status_code >= 500 else logger.info
        log(f"{exc.error_code}: {request.method} {request.url.path} - {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(
                exc.error_code, exc.message, str(request.url.path), request.method
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(
                "HTTP_EXCEPTION", str(exc.detail), str(request.url.path), request.method
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle validation errors."""
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=error_body(
                "VALIDATION_ERROR",
                "Request validation failed",
                str(request.url.path),
                request.method,
                format_validation_errors(exc),
            ),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Handle all other exceptions."""
        logger.error(
            f"Unhandled exception: {request.method} {request.url.path} - "
            f"{type(exc).__name__}: {exc}",
            exc_info=True
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(
                "INTERNAL_SERVER_ERROR",
                "An unexpected error occurred",
                str(request.url.path),
                request.method,
            ),
        )
