"""Interview report API schemas."""

import uuid
from decimal import Decimal
from typing import Any, Optional

from pydantic import Field, field_validator

from api.schemas.common import InputModel, PartialUpdateModel, RecordResponse, reject_null

# Scores are rounded to two places on write; the integer part must fit numeric(5, 2)
SCORE_FLOOR = Decimal("-999.995")
SCORE_CEILING = Decimal("999.995")


class InterviewReportCreate(InputModel):
    """Schema for creating the report of an interview."""

    interview_id: uuid.UUID
    company_report: Optional[dict[str, Any]] = Field(None, description="Report shown to the company")
    candidate_report: Optional[dict[str, Any]] = Field(None, description="Report shown to the candidate")
    overall_score: Decimal = Field(..., gt=SCORE_FLOOR, lt=SCORE_CEILING)
    recommendations: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "interview_id": "123e4567-e89b-12d3-a456-426614174000",
                "company_report": {
                    "technical_skills": {"score": 85, "strengths": ["Problem solving"]},
                },
                "candidate_report": {
                    "overall_performance": "Good",
                    "improvement_areas": ["System design"],
                },
                "overall_score": 85.5,
                "recommendations": "Strong candidate, proceed to the next round.",
            }
        }
    }


class InterviewReportUpdate(PartialUpdateModel):
    """Schema for partially updating an interview report."""

    interview_id: Optional[uuid.UUID] = None
    company_report: Optional[dict[str, Any]] = None
    candidate_report: Optional[dict[str, Any]] = None
    overall_score: Optional[Decimal] = Field(None, gt=SCORE_FLOOR, lt=SCORE_CEILING)
    recommendations: Optional[str] = None

    @field_validator("interview_id", "overall_score")
    @classmethod
    def fields_not_null(cls, v):
        return reject_null(v)


class OverallScoreUpdate(InputModel):
    overall_score: Decimal = Field(..., ge=0, le=100)


class RecommendationsUpdate(InputModel):
    recommendations: str = Field(..., min_length=1, max_length=1000)


class CompanyReportUpdate(InputModel):
    company_report: dict[str, Any]


class CandidateReportUpdate(InputModel):
    candidate_report: dict[str, Any]


class InterviewReportResponse(RecordResponse):
    """Schema for an interview report."""

    interview_id: uuid.UUID
    company_report: Optional[dict[str, Any]] = None
    candidate_report: Optional[dict[str, Any]] = None
    overall_score: float
    recommendations: Optional[str] = None
