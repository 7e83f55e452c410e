"""
Booking scheduling logic.

DATE POLICY
===========

Every date comparison in this module works on calendar days:

  - Pending bookings: date >= the caller's current date, truncated to the day
  - Resource occupancy: date == the requested day
  - Future-booking purges: date >= today, where "today" is the UTC date of
    the injected clock. A booking later today is therefore purged too.

Times of day are strings ("14:30") parsed by app.core.timeofday. Writes go
through the pydantic schemas, which reject unparseable times, so the pending
sort never sees a malformed start_time from the API.

OVERLAP GUARD
=============

Two bookings on the same resource and day conflict when their half-open
intervals [start, end) intersect. Back-to-back bookings (10:00-11:00 and
11:00-12:00) are allowed. The check is read-then-write with no lock, so two
simultaneous requests for the same slot can still both succeed; there is no
multi-document transaction to close that gap.
"""

from datetime import date, datetime, timezone
from typing import Any, Iterable, Optional

from fastapi import HTTPException, status

from app.core.logging import get_logger
from app.core.metrics import bookings_cleared, pending_query_latency, record_booking_operation
from app.core.timeofday import Clock, parse_time_of_day, to_day, utc_now
from app.models.booking import Booking
from app.repositories.base import WriteOutcome
from app.repositories.booking_repository import BookingRepository
from app.services.cache_service import BookingCache

logger = get_logger(__name__)


def sort_pending(bookings: Iterable[Booking]) -> list[Booking]:
    """Order by day, then by start time. Raises ValueError on a malformed start_time."""
    return sorted(bookings, key=lambda b: (b.date, parse_time_of_day(b.start_time)))


def find_conflict(start_time: str, end_time: str, others: Iterable[Booking]) -> Optional[Booking]:
    start, end = parse_time_of_day(start_time), parse_time_of_day(end_time)
    for other in others:
        if start < parse_time_of_day(other.end_time) and parse_time_of_day(other.start_time) < end:
            return other
    return None


class BookingService:
    def __init__(self, bookings: BookingRepository, cache: BookingCache, clock: Clock = utc_now):
        self.bookings = bookings
        self.cache = cache
        self.clock = clock

    def today(self) -> date:
        now = self.clock()
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        return now.date()

    async def get(self, booking_id: str) -> Optional[Booking]:
        return await self.bookings.get(booking_id)

    async def list_by_user(self, user_id: str) -> list[Booking]:
        return await self.bookings.list_by_user(user_id)

    async def list_by_institution_and_date_range(
        self,
        institution_id: str,
        start_date: date | datetime,
        end_date: date | datetime,
    ) -> list[Booking]:
        """Bookings of an institution within [start_date, end_date], both days inclusive."""
        return await self.bookings.list_by_institution_between(
            institution_id, to_day(start_date), to_day(end_date)
        )

    async def list_pending_for_user(self, user_id: str, current_date: date | datetime) -> list[Booking]:
        with pending_query_latency.time():
            bookings = await self.bookings.list_by_user_from(user_id, to_day(current_date))
            return sort_pending(bookings)

    async def list_resource_bookings_on_date(self, resource_id: str, day: date | datetime) -> list[Booking]:
        return await self.bookings.list_by_resource_on(resource_id, to_day(day))

    async def create(self, data: dict[str, Any]) -> Booking:
        data = {k: v for k, v in data.items() if k != "id"}
        await self._ensure_slot_free(data)

        booking = await self.bookings.create(data)
        record_booking_operation("create", "success")
        logger.info(
            "booking_created",
            booking_id=booking.id,
            resource_id=booking.resource_id,
            user_id=booking.user_id,
            date=str(booking.date),
            start_time=booking.start_time,
        )
        await self.cache.invalidate_resource(booking.resource_id)
        return booking

    async def update(self, booking_id: str, data: dict[str, Any]) -> WriteOutcome:
        existing = await self.bookings.get(booking_id)
        if existing is None:
            record_booking_operation("update", "not_found")
            return WriteOutcome.NOT_FOUND

        previous_resource = existing.resource_id
        await self._ensure_slot_free(data, exclude_id=booking_id)

        outcome = await self.bookings.replace(booking_id, data)
        record_booking_operation("update", outcome.value)
        if outcome is WriteOutcome.UPDATED:
            logger.info("booking_updated", booking_id=booking_id)
            await self.cache.invalidate_resource(previous_resource)
            if data.get("resource_id") and data["resource_id"] != previous_resource:
                await self.cache.invalidate_resource(data["resource_id"])
        return outcome

    async def delete(self, booking_id: str) -> bool:
        existing = await self.bookings.get(booking_id)
        if existing is None:
            record_booking_operation("delete", "not_found")
            return False

        resource_id = existing.resource_id
        deleted = await self.bookings.delete(booking_id)
        record_booking_operation("delete", "success" if deleted else "not_found")
        if deleted:
            logger.info("booking_deleted", booking_id=booking_id)
            await self.cache.invalidate_resource(resource_id)
        return deleted

    async def clear_future_bookings_for_resource(self, resource_id: str) -> bool:
        deleted = await self.bookings.delete_by_resource_from(resource_id, self.today())
        bookings_cleared.labels(scope="resource").inc(deleted)
        logger.info("future_bookings_cleared", scope="resource", resource_id=resource_id, deleted=deleted)
        await self.cache.invalidate_resource(resource_id)
        return deleted > 0

    async def clear_future_bookings_for_institution(self, institution_id: str) -> bool:
        deleted = await self.bookings.delete_by_institution_from(institution_id, self.today())
        bookings_cleared.labels(scope="institution").inc(deleted)
        logger.info(
            "future_bookings_cleared", scope="institution", institution_id=institution_id, deleted=deleted
        )
        await self.cache.invalidate_all()
        return deleted > 0

    async def _ensure_slot_free(self, data: dict[str, Any], exclude_id: Optional[str] = None) -> None:
        same_day = await self.bookings.list_same_day(
            data["resource_id"], to_day(data["date"]), exclude_id=exclude_id
        )
        conflict = find_conflict(data["start_time"], data["end_time"], same_day)
        if conflict is not None:
            record_booking_operation("update" if exclude_id else "create", "conflict")
            logger.warning(
                "booking_conflict",
                resource_id=data["resource_id"],
                date=str(data["date"]),
                requested=f"{data['start_time']}-{data['end_time']}",
                existing_booking_id=conflict.id,
            )
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=(
                    f"Resource already booked {conflict.start_time}-{conflict.end_time} "
                    f"on {conflict.date}"
                ),
            )
