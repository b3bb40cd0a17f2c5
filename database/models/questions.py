"""Question bank model."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from database.engine import Base


class Question(Base):
    """A technical question targeted at a job role and seniority level."""

    __tablename__ = "questions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    job_role_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    seniority_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)

    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    expected_answer: Mapped[str | None] = mapped_column(Text)
    complexity_level: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-5

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        Index("idx_questions_role_seniority", "job_role_id", "seniority_id"),
    )
