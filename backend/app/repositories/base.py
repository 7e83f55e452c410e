"""
Generic SQL-backed entity store.

Every write is committed on its own: there are no multi-statement
transactions, so a workflow that performs several writes sees each one
land (or fail) independently. A failed write rolls the session back before
re-raising, which keeps the session usable for the caller's next step.
"""

import enum
from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from app.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class WriteOutcome(str, enum.Enum):
    """Result of a whole-record replace."""

    NOT_FOUND = "not_found"
    UNCHANGED = "unchanged"
    UPDATED = "updated"

    @property
    def found(self) -> bool:
        return self is not WriteOutcome.NOT_FOUND


class SqlRepository(Generic[ModelT]):
    model: type[ModelT]

    # Columns owned by the store; clients can never set them
    protected_fields = frozenset({"id", "created_at", "updated_at"})

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, entity_id: str) -> Optional[ModelT]:
        return await self.db.get(self.model, entity_id)

    async def list_by(self, field: str, value: Any) -> list[ModelT]:
        column = getattr(self.model, field)
        result = await self.db.execute(select(self.model).where(column == value))
        return list(result.scalars().all())

    async def create(self, data: dict[str, Any]) -> ModelT:
        entity = self.model(**self._writable(data))
        self.db.add(entity)
        await self._commit()
        await self.db.refresh(entity)
        return entity

    async def replace(self, entity_id: str, data: dict[str, Any]) -> WriteOutcome:
        entity = await self.get(entity_id)
        if entity is None:
            return WriteOutcome.NOT_FOUND

        changed = False
        for field, value in self._writable(data).items():
            if getattr(entity, field) != value:
                setattr(entity, field, value)
                changed = True

        if not changed:
            return WriteOutcome.UNCHANGED

        await self._commit()
        await self.db.refresh(entity)
        return WriteOutcome.UPDATED

    async def delete(self, entity_id: str) -> bool:
        deleted = await self._execute_write(delete(self.model).where(self.model.id == entity_id))
        return deleted > 0

    def _writable(self, data: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in data.items() if k not in self.protected_fields}

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def _execute_write(self, statement: Executable) -> int:
        """Run a bulk UPDATE/DELETE, commit it, and return the affected row count."""
        try:
            result = await self.db.execute(statement)
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        return result.rowcount
