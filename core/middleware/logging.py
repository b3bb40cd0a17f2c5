"""
Structured logging setup and request/response logging middleware.
"""

import json
import logging
import time
import traceback
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

SKIP_PATH_SUFFIXES = ("/health", "/healthz", "/ready")


def should_log_request(path: str) -> bool:
    """
    Determine if a request should be logged based on the path.

    Args:
        path: Request path

    Returns:
        True if request should be logged, False otherwise
    """
    return not path.rstrip("/").endswith(SKIP_PATH_SUFFIXES)


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request start and completion as one JSON line each.

    Propagates ``x-request-id`` (generating one when absent) so log lines,
    error bodies and responses can be correlated.
    """

    def __init__(self, app: ASGIApp, slow_request_seconds: float = 1.0):
        super().__init__(app)
        self.slow_request_seconds = slow_request_seconds

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
        request.state.request_id = request_id

        if not should_log_request(request.url.path):
            response = await call_next(request)
            response.headers["x-request-id"] = request_id
            return response

        start_time = time.time()
        logger.info(json.dumps({
            "event": "request_started",
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
        }))

        response = None
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"Request processing error: {request.method} {request.url.path}",
                exc_info=True,
                extra={"request_id": request_id},
            )
            raise
        finally:
            duration = time.time() - start_time
            response_log = {
                "event": "request_completed",
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "duration_ms": round(duration * 1000, 2),
                "status_code": response.status_code if response else 500,
            }
            if duration > self.slow_request_seconds:
                response_log["performance"] = "slow"

            if response is None or response.status_code >= 500:
                logger.error(json.dumps(response_log))
            elif response.status_code >= 400:
                logger.warning(json.dumps(response_log))
            else:
                logger.info(json.dumps(response_log))

        response.headers["x-request-id"] = request_id
        return response


class StructuredFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "request_id"):
            log_data["request_id"] = record.request_id

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_data)


def setup_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure application-wide logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_logs: Whether to format logs as JSON
    """
    level = getattr(logging, log_level.upper())
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    if json_logs:
        console_handler.setFormatter(StructuredFormatter())
    else:
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
