"""Question bank endpoints."""

import logging
from typing import Any

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from api.dependencies import get_message_bus, get_question_service
from api.routes.resource import ResourceModule, build_router, register_message_handlers
from api.schemas.questions import (
    QuestionCreate,
    QuestionLookupRequest,
    QuestionResponse,
    QuestionUpdate,
)
from api.services import QuestionService
from core.messaging import MessageBus, Reference, ensure_references_exist
from core.messaging.verification import VERIFY_JOB_ROLE, VERIFY_SENIORITY_LEVEL

logger = logging.getLogger(__name__)

module = ResourceModule(
    name="question",
    label="Question",
    path="/questions",
    service_class=QuestionService,
    service_dependency=get_question_service,
    create_schema=QuestionCreate,
    update_schema=QuestionUpdate,
    response_schema=QuestionResponse,
    record_key="question",
    id_key="question_id",
    verify_pattern="verify_question",
    create_references=(
        (VERIFY_JOB_ROLE, "job_role_id"),
        (VERIFY_SENIORITY_LEVEL, "seniority_id"),
    ),
)

router = build_router(module)


@router.get(
    "/role/{role_id}/seniority/{seniority_id}",
    response_model=list[QuestionResponse],
    summary="List questions for a role and seniority",
)
async def find_by_role_and_seniority(
    role_id: str,
    seniority_id: str,
    service: QuestionService = Depends(get_question_service),
    bus: MessageBus = Depends(get_message_bus),
):
    await ensure_references_exist(
        bus,
        Reference(VERIFY_JOB_ROLE, role_id),
        Reference(VERIFY_SENIORITY_LEVEL, seniority_id),
    )
    return await service.find_by_role_and_seniority(role_id, seniority_id)


def register_handlers(bus: MessageBus, session_factory: async_sessionmaker[AsyncSession]) -> None:
    register_message_handlers(module, bus, session_factory)

    async def get_questions_by_role_and_seniority(data: Any) -> dict[str, Any]:
        try:
            lookup = QuestionLookupRequest.model_validate(data)
            async with session_factory() as session:
                questions = await QuestionService(session).find_by_role_and_seniority(
                    lookup.roleId, lookup.seniorityId
                )
        except Exception as exc:
            logger.warning(f"Question lookup failed for {data!r}: {exc}")
            return {"questions": [], "success": False, "error": str(exc)}
        return {
            "questions": [module.serialize(question) for question in questions],
            "success": True,
        }

    bus.message_handler("get_questions_by_role_and_seniority", get_questions_by_role_and_seniority)
