"""Common Pydantic schemas shared across the API."""

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.utils.datetime import ensure_utc


class InputModel(BaseModel):
    """Base for request bodies: unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")


class PartialUpdateModel(InputModel):
    """
    Base for partial updates.

    Every field is optional; only the fields present in the request body are
    applied. Subclasses guard required columns with ``reject_null``.
    """

    def changes(self) -> dict[str, Any]:
        """Fields explicitly provided by the client."""
        return self.model_dump(exclude_unset=True)


def reject_null(value: Any) -> Any:
    """Validator body shared by partial updates of required columns."""
    if value is None:
        raise ValueError("Field may be omitted but cannot be null")
    return value


class RecordResponse(BaseModel):
    """Base for stored records: generated id and creation timestamp."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(description="Generated identifier")
    created_at: datetime = Field(description="Timestamp when the record was created")

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, v: datetime) -> datetime:
        """Always render timestamps with a UTC offset."""
        return ensure_utc(v)


class MessageResponse(BaseModel):
    """Confirmation returned by deletions."""

    message: str


class ErrorResponse(BaseModel):
    """Error response model."""

    code: str = Field(description="Error code for programmatic handling")
    message: str = Field(description="Human readable error message")
    path: str
    method: str
    details: Optional[Any] = None
    request_id: Optional[str] = None


class ErrorEnvelope(BaseModel):
    """Top-level error body."""

    error: ErrorResponse
