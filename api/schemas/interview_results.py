"""Interview result API schemas."""

import uuid
from typing import Optional

from pydantic import Field, field_validator

from api.schemas.common import InputModel, PartialUpdateModel, RecordResponse, reject_null


class InterviewResultCreate(InputModel):
    """Schema for recording the outcome of one question."""

    interview_id: uuid.UUID
    question_id: uuid.UUID
    candidate_answer: Optional[str] = None
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5")
    ai_feedback: Optional[str] = None


class InterviewResultUpdate(PartialUpdateModel):
    """Schema for partially updating an interview result."""

    interview_id: Optional[uuid.UUID] = None
    question_id: Optional[uuid.UUID] = None
    candidate_answer: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    ai_feedback: Optional[str] = None

    @field_validator("interview_id", "question_id", "rating")
    @classmethod
    def fields_not_null(cls, v):
        return reject_null(v)


class RatingUpdate(InputModel):
    rating: int = Field(..., ge=1, le=5)


class FeedbackUpdate(InputModel):
    ai_feedback: str = Field(..., min_length=1, max_length=1000)


class InterviewResultResponse(RecordResponse):
    """Schema for an interview result."""

    interview_id: uuid.UUID
    question_id: uuid.UUID
    candidate_answer: Optional[str] = None
    rating: int
    ai_feedback: Optional[str] = None
