"""Interview model."""

import uuid
from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import DateTime, Enum as SQLEnum, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from database.engine import Base


class InterviewStatus(str, PyEnum):
    """Lifecycle status of an interview."""

    PENDING = "pending"
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Interview(Base):
    """One candidate interview, created for an application from a config."""

    __tablename__ = "interviews"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    application_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    config_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    status: Mapped[InterviewStatus] = mapped_column(
        SQLEnum(
            InterviewStatus,
            name="interview_status",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        default=InterviewStatus.PENDING,
        nullable=False,
    )

    scheduled_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    expiration_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    video_recording_url: Mapped[str | None] = mapped_column(String(255))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
