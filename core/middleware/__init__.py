"""
Core middleware package.

- Error handling with a uniform JSON error envelope
- Structured request logging with request ids
"""

from core.middleware.error_handling import (
    ErrorHandlingMiddleware,
    setup_error_handlers,
)

from core.middleware.logging import (
    StructuredLoggingMiddleware,
    setup_logging,
    get_logger,
)

__all__ = [
    # Error handling
    "ErrorHandlingMiddleware",
    "setup_error_handlers",
    # Logging
    "StructuredLoggingMiddleware",
    "setup_logging",
    "get_logger",
]
