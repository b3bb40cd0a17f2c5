"""FastAPI dependencies for dependency injection."""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.services import (
    InterviewConfigService,
    InterviewReportService,
    InterviewResultService,
    InterviewService,
    QuestionService,
)
from core.messaging import MessageBus
from database.engine import get_db

__all__ = [
    "get_db",
    "get_message_bus",
    "get_optional_message_bus",
    "get_interview_config_service",
    "get_interview_service",
    "get_interview_result_service",
    "get_interview_report_service",
    "get_question_service",
]


def get_message_bus(request: Request) -> MessageBus:
    """Process-wide message bus created in the application lifespan."""
    bus = getattr(request.app.state, "message_bus", None)
    if bus is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Message bus is not available",
        )
    return bus


def get_optional_message_bus(request: Request) -> Optional[MessageBus]:
    """Bus for endpoints that only emit; None when it is not attached."""
    return getattr(request.app.state, "message_bus", None)


async def get_interview_config_service(
    db: AsyncSession = Depends(get_db),
) -> InterviewConfigService:
    return InterviewConfigService(db)


async def get_interview_service(db: AsyncSession = Depends(get_db)) -> InterviewService:
    return InterviewService(db)


async def get_interview_result_service(
    db: AsyncSession = Depends(get_db),
) -> InterviewResultService:
    return InterviewResultService(db)


async def get_interview_report_service(
    db: AsyncSession = Depends(get_db),
) -> InterviewReportService:
    return InterviewReportService(db)


async def get_question_service(db: AsyncSession = Depends(get_db)) -> QuestionService:
    return QuestionService(db)
