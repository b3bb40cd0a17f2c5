"""Generic CRUD service shared by every resource."""

import logging
import uuid
from typing import Any, Generic, Optional, Sequence, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import NotFoundError
from database.engine import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def parse_uuid(value: Any) -> Optional[uuid.UUID]:
    """Parse an identifier, returning None when it is not a well-formed UUID."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, AttributeError, TypeError):
        return None


class ResourceService(Generic[ModelT]):
    """
    Persistence operations for one entity kind.

    Subclasses set ``model`` and ``resource`` (the label used in not-found
    messages) and add their own finders and narrow mutators on top of
    ``_find_by`` and ``_set_field``.
    """

    model: Type[ModelT]
    resource: str

    def __init__(self, session: AsyncSession):
        self.session = session

    def _not_found(self, record_id: Any) -> NotFoundError:
        return NotFoundError(self.resource, record_id)

    async def create(self, data: dict[str, Any]) -> ModelT:
        """Persist a new record and return it with its generated fields."""
        record = self.model(**data)
        self.session.add(record)
        await self.session.commit()
        await self.session.refresh(record)
        logger.info(f"Created {self.resource} {record.id}")
        return record

    async def find_all(self) -> Sequence[ModelT]:
        result = await self.session.execute(select(self.model))
        return result.scalars().all()

    async def find_one(self, record_id: Any) -> ModelT:
        """
        Fetch a record by id.

        Raises:
            NotFoundError: No record has this id, or the id is malformed
        """
        parsed = parse_uuid(record_id)
        if parsed is None:
            raise self._not_found(record_id)
        record = await self.session.get(self.model, parsed)
        if record is None:
            raise self._not_found(record_id)
        return record

    async def update(self, record_id: Any, changes: dict[str, Any]) -> ModelT:
        """Overlay the provided fields on an existing record."""
        record = await self.find_one(record_id)
        for field, value in changes.items():
            setattr(record, field, value)
        await self.session.commit()
        await self.session.refresh(record)
        logger.info(f"Updated {self.resource} {record.id}: {sorted(changes)}")
        return record

    async def remove(self, record_id: Any) -> None:
        record = await self.find_one(record_id)
        await self.session.delete(record)
        await self.session.commit()
        logger.info(f"Deleted {self.resource} {record_id}")

    async def exists(self, record_id: Any) -> bool:
        """Existence check backing the ``verify_*`` responders."""
        parsed = parse_uuid(record_id)
        if parsed is None:
            return False
        return await self.session.get(self.model, parsed) is not None

    async def _find_by(self, **filters: Any) -> Sequence[ModelT]:
        """Equality filter over foreign identifier columns."""
        query = select(self.model)
        for column, value in filters.items():
            parsed = parse_uuid(value)
            if parsed is None:
                return []
            query = query.where(getattr(self.model, column) == parsed)
        result = await self.session.execute(query)
        return result.scalars().all()

    async def _set_field(self, record_id: Any, field: str, value: Any) -> ModelT:
        """Narrow mutator: find or 404, then change exactly one field."""
        return await self.update(record_id, {field: value})
