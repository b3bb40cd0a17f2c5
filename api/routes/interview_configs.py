"""
Interview configuration endpoints.

Configurations belong to an enterprise and a job role, both owned by other
services and verified over the message bus.
"""

import logging
from typing import Any

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from api.dependencies import get_interview_config_service, get_message_bus
from api.routes.resource import ResourceModule, build_router, register_message_handlers
from api.schemas.interview_configs import (
    ConfigLookupRequest,
    InterviewConfigCreate,
    InterviewConfigResponse,
    InterviewConfigUpdate,
)
from api.services import InterviewConfigService
from core.messaging import MessageBus, Reference, ensure_references_exist
from core.messaging.verification import VERIFY_ENTERPRISE, VERIFY_JOB_ROLE

logger = logging.getLogger(__name__)

module = ResourceModule(
    name="interview_config",
    label="Interview config",
    path="/interview-configs",
    service_class=InterviewConfigService,
    service_dependency=get_interview_config_service,
    create_schema=InterviewConfigCreate,
    update_schema=InterviewConfigUpdate,
    response_schema=InterviewConfigResponse,
    record_key="config",
    id_key="config_id",
    verify_pattern="verify_config",
    create_references=(
        (VERIFY_ENTERPRISE, "enterprise_id"),
        (VERIFY_JOB_ROLE, "job_role_id"),
    ),
)

router = build_router(module)


@router.get(
    "/enterprise/{enterprise_id}/role/{role_id}",
    response_model=list[InterviewConfigResponse],
    summary="List configs of an enterprise role",
)
async def find_by_enterprise_and_role(
    enterprise_id: str,
    role_id: str,
    service: InterviewConfigService = Depends(get_interview_config_service),
    bus: MessageBus = Depends(get_message_bus),
):
    """Configurations for one job role of an enterprise."""
    await ensure_references_exist(
        bus,
        Reference(VERIFY_ENTERPRISE, enterprise_id),
        Reference(VERIFY_JOB_ROLE, role_id),
    )
    return await service.find_by_enterprise_and_role(enterprise_id, role_id)


def register_handlers(bus: MessageBus, session_factory: async_sessionmaker[AsyncSession]) -> None:
    register_message_handlers(module, bus, session_factory)

    async def get_config_by_enterprise_and_role(data: Any) -> dict[str, Any]:
        try:
            lookup = ConfigLookupRequest.model_validate(data)
            async with session_factory() as session:
                configs = await InterviewConfigService(session).find_by_enterprise_and_role(
                    lookup.enterpriseId, lookup.roleId
                )
        except Exception as exc:
            logger.warning(f"Config lookup failed for {data!r}: {exc}")
            return {"config": None, "success": False, "error": str(exc)}
        return {"config": [module.serialize(config) for config in configs], "success": True}

    bus.message_handler("get_config_by_enterprise_and_role", get_config_by_enterprise_and_role)
