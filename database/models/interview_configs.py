"""Interview configuration model: the shape of an interview for an enterprise role."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from database.engine import Base


class InterviewConfig(Base):
    """
    Interview settings for one enterprise, job role and seniority.

    ``enterprise_id``, ``job_role_id`` and ``seniority_id`` belong to other
    services and are verified over the message bus, never joined.
    """

    __tablename__ = "interview_configs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    enterprise_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    job_role_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    seniority_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)

    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    num_questions: Mapped[int] = mapped_column(Integer, nullable=False)
    complexity_level: Mapped[int] = mapped_column(Integer, nullable=False)
    validity_hours: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        Index("idx_interview_configs_enterprise_role", "enterprise_id", "job_role_id"),
    )
