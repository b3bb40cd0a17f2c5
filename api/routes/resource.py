"""
Generic resource endpoints and message handlers.

Every resource exposes the same CRUD surface: creation first verifies the
foreign identifiers it depends on over the message bus, every successful
mutation emits a notification, and each resource answers the
``verify_<resource>`` existence query for its peers.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Type

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from api.dependencies import get_message_bus, get_optional_message_bus
from api.schemas.common import ErrorEnvelope, MessageResponse, PartialUpdateModel, RecordResponse
from api.services.base import ResourceService
from core.messaging import MessageBus, Reference, ensure_references_exist
from core.utils.datetime import now

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorEnvelope},
    status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorEnvelope},
    status.HTTP_504_GATEWAY_TIMEOUT: {"model": ErrorEnvelope},
}


@dataclass(frozen=True)
class ResourceModule:
    """
    Description of one resource.

    Attributes:
        name: Event prefix, e.g. ``interview_result``
        label: Human readable name used in messages
        path: Router prefix
        service_class: Service bound to a session by the responders
        service_dependency: FastAPI dependency returning the service
        record_key: Key carrying the record in created/updated events
        id_key: Key carrying the id in deleted events
        verify_pattern: Existence query answered by this resource
        create_references: ``(verify pattern, payload field)`` pairs checked before create
        extra_events: Events emitted by resource specific endpoints
    """

    name: str
    label: str
    path: str
    service_class: Type[ResourceService]
    service_dependency: Callable[..., Any]
    create_schema: Type[BaseModel]
    update_schema: Type[PartialUpdateModel]
    response_schema: Type[RecordResponse]
    record_key: str
    id_key: str
    verify_pattern: str
    create_references: tuple[tuple[str, str], ...] = ()
    extra_events: tuple[str, ...] = ()

    def event(self, action: str) -> str:
        return f"{self.name}_{action}"

    @property
    def event_names(self) -> tuple[str, ...]:
        return (
            self.event("created"),
            self.event("updated"),
            self.event("deleted"),
        ) + self.extra_events

    def serialize(self, record: Any) -> dict[str, Any]:
        """JSON-safe rendering of a stored record for event payloads."""
        return self.response_schema.model_validate(record).model_dump(mode="json")

    def references_for(self, payload: BaseModel) -> list[Reference]:
        return [
            Reference(pattern, str(getattr(payload, field)))
            for pattern, field in self.create_references
        ]


def emit_event(bus: Optional[MessageBus], pattern: str, **payload: Any) -> None:
    """
    Fire-and-forget notification stamped with the server time.

    Without a bus the change is already committed, so the event is dropped
    and logged instead of failing the request.
    """
    if bus is None:
        logger.warning(f"Message bus unavailable, dropping event '{pattern}'")
        return
    payload["timestamp"] = now()
    bus.emit(pattern, payload)


def build_router(module: ResourceModule) -> APIRouter:
    """Create the POST/GET/PATCH/DELETE endpoints shared by every resource."""
    router = APIRouter(prefix=module.path, tags=[module.label], responses=ERROR_RESPONSES)
    create_schema = module.create_schema
    update_schema = module.update_schema
    response_schema = module.response_schema

    @router.post(
        "",
        response_model=response_schema,
        status_code=status.HTTP_201_CREATED,
        name=f"create_{module.name}",
        summary=f"Create {module.label}",
    )
    async def create(
        payload: create_schema,
        service: ResourceService = Depends(module.service_dependency),
        bus: MessageBus = Depends(get_message_bus),
    ):
        await ensure_references_exist(bus, *module.references_for(payload))
        record = await service.create(payload.model_dump())
        emit_event(bus, module.event("created"), **{module.record_key: module.serialize(record)})
        return record

    @router.get(
        "",
        response_model=list[response_schema],
        name=f"list_{module.name}",
        summary=f"List {module.label}s",
    )
    async def find_all(service: ResourceService = Depends(module.service_dependency)):
        return await service.find_all()

    @router.get(
        "/{record_id}",
        response_model=response_schema,
        name=f"get_{module.name}",
        summary=f"Get {module.label}",
    )
    async def find_one(
        record_id: str,
        service: ResourceService = Depends(module.service_dependency),
    ):
        return await service.find_one(record_id)

    @router.patch(
        "/{record_id}",
        response_model=response_schema,
        name=f"update_{module.name}",
        summary=f"Update {module.label}",
    )
    async def update(
        record_id: str,
        payload: update_schema,
        service: ResourceService = Depends(module.service_dependency),
        bus: Optional[MessageBus] = Depends(get_optional_message_bus),
    ):
        record = await service.update(record_id, payload.changes())
        emit_event(bus, module.event("updated"), **{module.record_key: module.serialize(record)})
        return record

    @router.delete(
        "/{record_id}",
        response_model=MessageResponse,
        name=f"delete_{module.name}",
        summary=f"Delete {module.label}",
    )
    async def remove(
        record_id: str,
        service: ResourceService = Depends(module.service_dependency),
        bus: Optional[MessageBus] = Depends(get_optional_message_bus),
    ):
        await service.remove(record_id)
        emit_event(bus, module.event("deleted"), **{module.id_key: record_id})
        return MessageResponse(message=f"{module.label} deleted successfully")

    return router


def _log_event(pattern: str) -> Callable[[Any], Any]:
    async def handle(data: Any) -> None:
        logger.info(f"Received event '{pattern}': {data}")

    return handle


def register_message_handlers(
    module: ResourceModule,
    bus: MessageBus,
    session_factory: async_sessionmaker[AsyncSession],
) -> None:
    """Answer ``verify_<resource>`` and log receipt of the resource's own events."""

    async def verify(data: Any) -> bool:
        try:
            async with session_factory() as session:
                return await module.service_class(session).exists(data)
        except Exception:
            logger.warning(f"'{module.verify_pattern}' lookup failed for {data!r}", exc_info=True)
            return False

    bus.message_handler(module.verify_pattern, verify)
    for pattern in module.event_names:
        bus.event_handler(pattern, _log_event(pattern))


def outbound_patterns(modules: Sequence[ResourceModule]) -> set[str]:
    """Verification queries the given modules send on create."""
    return {pattern for module in modules for pattern, _ in module.create_references}
