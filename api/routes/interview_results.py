"""Per-question interview result endpoints."""

from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from api.dependencies import get_interview_result_service, get_message_bus, get_optional_message_bus
from api.routes.resource import ResourceModule, build_router, emit_event, register_message_handlers
from api.schemas.interview_results import (
    FeedbackUpdate,
    InterviewResultCreate,
    InterviewResultResponse,
    InterviewResultUpdate,
    RatingUpdate,
)
from api.services import InterviewResultService
from core.messaging import MessageBus, Reference, ensure_references_exist
from core.messaging.verification import VERIFY_INTERVIEW, VERIFY_QUESTION

module = ResourceModule(
    name="interview_result",
    label="Interview result",
    path="/interview-results",
    service_class=InterviewResultService,
    service_dependency=get_interview_result_service,
    create_schema=InterviewResultCreate,
    update_schema=InterviewResultUpdate,
    response_schema=InterviewResultResponse,
    record_key="result",
    id_key="result_id",
    verify_pattern="verify_result",
    create_references=(
        (VERIFY_INTERVIEW, "interview_id"),
        (VERIFY_QUESTION, "question_id"),
    ),
    extra_events=(
        "interview_result_rating_updated",
        "interview_result_feedback_updated",
    ),
)

router = build_router(module)


@router.get(
    "/interview/{interview_id}",
    response_model=list[InterviewResultResponse],
    summary="List results of an interview",
)
async def find_by_interview(
    interview_id: str,
    service: InterviewResultService = Depends(get_interview_result_service),
    bus: MessageBus = Depends(get_message_bus),
):
    await ensure_references_exist(bus, Reference(VERIFY_INTERVIEW, interview_id))
    return await service.find_by_interview(interview_id)


@router.patch(
    "/{record_id}/rating",
    response_model=InterviewResultResponse,
    summary="Update result rating",
)
async def update_rating(
    record_id: str,
    payload: RatingUpdate,
    service: InterviewResultService = Depends(get_interview_result_service),
    bus: Optional[MessageBus] = Depends(get_optional_message_bus),
):
    result = await service.update_rating(record_id, payload.rating)
    emit_event(
        bus,
        "interview_result_rating_updated",
        result_id=str(result.id),
        rating=result.rating,
    )
    return result


@router.patch(
    "/{record_id}/feedback",
    response_model=InterviewResultResponse,
    summary="Update AI feedback",
)
async def update_feedback(
    record_id: str,
    payload: FeedbackUpdate,
    service: InterviewResultService = Depends(get_interview_result_service),
    bus: Optional[MessageBus] = Depends(get_optional_message_bus),
):
    result = await service.update_ai_feedback(record_id, payload.ai_feedback)
    emit_event(
        bus,
        "interview_result_feedback_updated",
        result_id=str(result.id),
        feedback=result.ai_feedback,
    )
    return result


def register_handlers(bus: MessageBus, session_factory: async_sessionmaker[AsyncSession]) -> None:
    register_message_handlers(module, bus, session_factory)
