"""
Domain exceptions raised by services, the message bus and the endpoint layer.

Each exception carries the HTTP status and error code it is rendered with by
``core.middleware.error_handling``.
"""

from typing import Any, Optional

from fastapi import status


class ServiceError(Exception):
    """Base class for expected, caller-recoverable failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "SERVICE_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """An identifier lookup missed in the entity store."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"

    def __init__(self, resource: str, identifier: Any, message: Optional[str] = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(message or f"{resource} with ID {identifier} not found")


class ReferenceNotFoundError(ServiceError):
    """A verification query for a referenced resource replied false."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "REFERENCE_NOT_FOUND"

    def __init__(self, resource: str, identifier: Any = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found")


class MessageBusError(ServiceError):
    """The message channel failed to carry a request or its reply."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code = "MESSAGE_BUS_UNAVAILABLE"


class MessageTimeoutError(MessageBusError):
    """No reply arrived for a request within the configured timeout."""

    status_code = status.HTTP_504_GATEWAY_TIMEOUT
    error_code = "MESSAGE_BUS_TIMEOUT"

    def __init__(self, pattern: str, timeout: float):
        self.pattern = pattern
        self.timeout = timeout
        super().__init__(f"No reply to '{pattern}' within {timeout:g}s")
