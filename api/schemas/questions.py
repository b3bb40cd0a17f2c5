"""Question bank API schemas."""

import uuid
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from api.schemas.common import InputModel, PartialUpdateModel, RecordResponse, reject_null


class QuestionCreate(InputModel):
    """Schema for adding a question to the bank."""

    job_role_id: uuid.UUID
    seniority_id: uuid.UUID
    question_text: str = Field(..., min_length=1)
    expected_answer: Optional[str] = None
    complexity_level: int = Field(..., ge=1, le=5)


class QuestionUpdate(PartialUpdateModel):
    job_role_id: Optional[uuid.UUID] = None
    seniority_id: Optional[uuid.UUID] = None
    question_text: Optional[str] = Field(None, min_length=1)
    expected_answer: Optional[str] = None
    complexity_level: Optional[int] = Field(None, ge=1, le=5)

    @field_validator("job_role_id", "seniority_id", "question_text", "complexity_level")
    @classmethod
    def fields_not_null(cls, v):
        return reject_null(v)


class QuestionResponse(RecordResponse):
    job_role_id: uuid.UUID
    seniority_id: uuid.UUID
    question_text: str
    expected_answer: Optional[str] = None
    complexity_level: int


class QuestionLookupRequest(BaseModel):
    """Payload of the ``get_questions_by_role_and_seniority`` query."""

    roleId: str
    seniorityId: str
