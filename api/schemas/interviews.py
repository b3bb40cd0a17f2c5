"""Interview API schemas."""

import uuid
from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

from api.schemas.common import InputModel, PartialUpdateModel, RecordResponse, reject_null
from core.utils.datetime import ensure_utc
from database.models.interviews import InterviewStatus


_http_url = TypeAdapter(HttpUrl)


def _check_http_url(value: str) -> str:
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("Must be a valid http(s) URL") from None
    return value


# Validated as an http(s) URL, stored exactly as sent
RecordingUrl = Annotated[str, Field(max_length=255), AfterValidator(_check_http_url)]


class InterviewCreate(InputModel):
    """Schema for creating an interview."""

    application_id: uuid.UUID = Field(..., description="Candidate application")
    config_id: uuid.UUID = Field(..., description="Interview configuration to run")
    status: InterviewStatus = Field(InterviewStatus.PENDING, description="Initial status")
    scheduled_date: Optional[datetime] = None
    expiration_date: datetime = Field(..., description="When the interview expires")
    video_recording_url: Optional[RecordingUrl] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "application_id": "123e4567-e89b-12d3-a456-426614174000",
                "config_id": "123e4567-e89b-12d3-a456-426614174001",
                "status": "pending",
                "scheduled_date": "2024-03-20T10:00:00Z",
                "expiration_date": "2024-03-27T10:00:00Z",
                "video_recording_url": "https://storage.example.com/interviews/123.mp4",
            }
        }
    }


class InterviewUpdate(PartialUpdateModel):
    """Schema for partially updating an interview."""

    application_id: Optional[uuid.UUID] = None
    config_id: Optional[uuid.UUID] = None
    status: Optional[InterviewStatus] = None
    scheduled_date: Optional[datetime] = None
    expiration_date: Optional[datetime] = None
    video_recording_url: Optional[RecordingUrl] = None

    @field_validator("application_id", "config_id", "status", "expiration_date")
    @classmethod
    def fields_not_null(cls, v):
        return reject_null(v)


class InterviewStatusUpdate(InputModel):
    """Schema for changing only the status of an interview."""

    status: InterviewStatus


class InterviewResponse(RecordResponse):
    """Schema for an interview."""

    application_id: uuid.UUID
    config_id: uuid.UUID
    status: InterviewStatus
    scheduled_date: Optional[datetime] = None
    expiration_date: datetime
    video_recording_url: Optional[str] = None

    @field_validator("scheduled_date", "expiration_date")
    @classmethod
    def normalize_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v) if v is not None else v
