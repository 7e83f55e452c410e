"""
Booking store: CRUD plus the date-scoped queries the scheduler needs.

All date arguments are calendar days. Callers truncate datetimes before
they get here.
"""

from datetime import date
from typing import Optional

from sqlalchemy import delete, select

from app.models.booking import Booking
from app.repositories.base import SqlRepository


class BookingRepository(SqlRepository[Booking]):
    model = Booking

    async def list_by_user(self, user_id: str) -> list[Booking]:
        return await self.list_by("user_id", user_id)

    async def list_by_institution_between(
        self, institution_id: str, start: date, end: date
    ) -> list[Booking]:
        result = await self.db.execute(
            select(Booking).where(
                Booking.institution_id == institution_id,
                Booking.date >= start,
                Booking.date <= end,
            )
        )
        return list(result.scalars().all())

    async def list_by_user_from(self, user_id: str, day: date) -> list[Booking]:
        result = await self.db.execute(
            select(Booking).where(Booking.user_id == user_id, Booking.date >= day)
        )
        return list(result.scalars().all())

    async def list_by_resource_on(self, resource_id: str, day: date) -> list[Booking]:
        result = await self.db.execute(
            select(Booking).where(Booking.resource_id == resource_id, Booking.date == day)
        )
        return list(result.scalars().all())

    async def delete_by_resource_from(self, resource_id: str, day: date) -> int:
        return await self._execute_write(
            delete(Booking).where(Booking.resource_id == resource_id, Booking.date >= day)
        )

    async def delete_by_institution_from(self, institution_id: str, day: date) -> int:
        return await self._execute_write(
            delete(Booking).where(Booking.institution_id == institution_id, Booking.date >= day)
        )

    async def list_same_day(
        self, resource_id: str, day: date, exclude_id: Optional[str] = None
    ) -> list[Booking]:
        """Bookings sharing a resource and day, optionally skipping one booking."""
        query = select(Booking).where(Booking.resource_id == resource_id, Booking.date == day)
        if exclude_id is not None:
            query = query.where(Booking.id != exclude_id)
        result = await self.db.execute(query)
        return list(result.scalars().all())
