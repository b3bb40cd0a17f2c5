"""Per-question interview result model."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Integer, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from database.engine import Base


class InterviewResult(Base):
    """The candidate's answer to one question, with its rating and AI feedback."""

    __tablename__ = "interview_results"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    interview_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    question_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)

    candidate_answer: Mapped[str | None] = mapped_column(Text)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-5
    ai_feedback: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
