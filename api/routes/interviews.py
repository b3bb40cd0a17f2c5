"""
Interview endpoints.

An interview is created for a candidate application (owned by the
applications service) from a stored interview configuration.
"""

from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from api.dependencies import get_interview_service, get_message_bus, get_optional_message_bus
from api.routes.resource import ResourceModule, build_router, emit_event, register_message_handlers
from api.schemas.interviews import (
    InterviewCreate,
    InterviewResponse,
    InterviewStatusUpdate,
    InterviewUpdate,
)
from api.services import InterviewService
from core.messaging import MessageBus, Reference, ensure_references_exist
from core.messaging.verification import VERIFY_APPLICATION

module = ResourceModule(
    name="interview",
    label="Interview",
    path="/interviews",
    service_class=InterviewService,
    service_dependency=get_interview_service,
    create_schema=InterviewCreate,
    update_schema=InterviewUpdate,
    response_schema=InterviewResponse,
    record_key="interview",
    id_key="interview_id",
    verify_pattern="verify_interview",
    create_references=((VERIFY_APPLICATION, "application_id"),),
    extra_events=("interview_status_updated",),
)

router = build_router(module)


@router.get(
    "/application/{application_id}",
    response_model=InterviewResponse,
    summary="Get the interview of an application",
)
async def find_by_application(
    application_id: str,
    service: InterviewService = Depends(get_interview_service),
    bus: MessageBus = Depends(get_message_bus),
):
    await ensure_references_exist(bus, Reference(VERIFY_APPLICATION, application_id))
    return await service.find_by_application(application_id)


@router.patch(
    "/{record_id}/status",
    response_model=InterviewResponse,
    summary="Update interview status",
)
async def update_status(
    record_id: str,
    payload: InterviewStatusUpdate,
    service: InterviewService = Depends(get_interview_service),
    bus: Optional[MessageBus] = Depends(get_optional_message_bus),
):
    interview = await service.update_status(record_id, payload.status)
    emit_event(
        bus,
        "interview_status_updated",
        interview_id=str(interview.id),
        status=interview.status.value,
    )
    return interview


def register_handlers(bus: MessageBus, session_factory: async_sessionmaker[AsyncSession]) -> None:
    register_message_handlers(module, bus, session_factory)
