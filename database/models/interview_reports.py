"""Aggregate interview report model."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import JSON, DateTime, Numeric, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from database.engine import Base


class InterviewReport(Base):
    """
    Reports produced once an interview is evaluated.

    ``company_report`` and ``candidate_report`` are free-form JSON documents
    addressed to the hiring company and to the candidate respectively.
    """

    __tablename__ = "interview_reports"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    interview_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    company_report: Mapped[dict[str, Any] | None] = mapped_column(JSON)
    candidate_report: Mapped[dict[str, Any] | None] = mapped_column(JSON)
    overall_score: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    recommendations: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
