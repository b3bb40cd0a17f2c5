"""Interview configuration API schemas."""

import uuid
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from api.schemas.common import InputModel, PartialUpdateModel, RecordResponse, reject_null


class InterviewConfigCreate(InputModel):
    """Schema for creating an interview configuration."""

    enterprise_id: uuid.UUID = Field(..., description="Enterprise owning the config")
    job_role_id: uuid.UUID = Field(..., description="Job role the interview targets")
    seniority_id: uuid.UUID = Field(..., description="Seniority level the interview targets")
    duration_minutes: int = Field(..., ge=1, description="Duration in minutes")
    num_questions: int = Field(..., ge=1, description="Number of questions")
    complexity_level: int = Field(..., ge=1, le=5, description="Complexity from 1 to 5")
    validity_hours: int = Field(..., ge=1, description="Validity period in hours")

    model_config = {
        "json_schema_extra": {
            "example": {
                "enterprise_id": "123e4567-e89b-12d3-a456-426614174001",
                "job_role_id": "123e4567-e89b-12d3-a456-426614174002",
                "seniority_id": "123e4567-e89b-12d3-a456-426614174003",
                "duration_minutes": 60,
                "num_questions": 10,
                "complexity_level": 3,
                "validity_hours": 24,
            }
        }
    }


class InterviewConfigUpdate(PartialUpdateModel):
    """Schema for partially updating an interview configuration."""

    enterprise_id: Optional[uuid.UUID] = None
    job_role_id: Optional[uuid.UUID] = None
    seniority_id: Optional[uuid.UUID] = None
    duration_minutes: Optional[int] = Field(None, ge=1)
    num_questions: Optional[int] = Field(None, ge=1)
    complexity_level: Optional[int] = Field(None, ge=1, le=5)
    validity_hours: Optional[int] = Field(None, ge=1)

    @field_validator(
        "enterprise_id",
        "job_role_id",
        "seniority_id",
        "duration_minutes",
        "num_questions",
        "complexity_level",
        "validity_hours",
    )
    @classmethod
    def fields_not_null(cls, v):
        return reject_null(v)


class InterviewConfigResponse(RecordResponse):
    """Schema for an interview configuration."""

    enterprise_id: uuid.UUID
    job_role_id: uuid.UUID
    seniority_id: uuid.UUID
    duration_minutes: int
    num_questions: int
    complexity_level: int
    validity_hours: int


class ConfigLookupRequest(BaseModel):
    """Payload of the ``get_config_by_enterprise_and_role`` query."""

    enterpriseId: str
    roleId: str
