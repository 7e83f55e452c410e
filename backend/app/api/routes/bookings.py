"""
Booking endpoints: CRUD plus the scheduling queries (pending, per-resource
day view, institution statistics).
"""

import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.api.deps import get_booking_cache, get_booking_service
from app.core.logging import get_logger
from app.core.security import CurrentUser, get_current_user, require_admin
from app.repositories.base import WriteOutcome
from app.schemas.booking import BookingCreate, BookingResponse, BookingUpdate
from app.services.booking_service import BookingService
from app.services.cache_service import BookingCache

logger = get_logger(__name__)
router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.get("/statistics", response_model=list[BookingResponse])
async def booking_statistics(
    institution_id: str = Query(..., min_length=1),
    start_date: dt.date = Query(...),
    end_date: dt.date = Query(...),
    _admin: CurrentUser = Depends(require_admin),
    service: BookingService = Depends(get_booking_service),
):
    """All bookings of an institution between two days, both inclusive. Admin only."""
    return await service.list_by_institution_and_date_range(institution_id, start_date, end_date)


@router.get("/pending", response_model=list[BookingResponse])
async def pending_bookings(
    user_id: str = Query(..., min_length=1),
    current_date: Optional[dt.date] = Query(None, description="Defaults to today (UTC)"),
    _user: CurrentUser = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """A user's bookings from current_date on, ordered by day then start time."""
    return await service.list_pending_for_user(user_id, current_date or service.today())


@router.get("/resource/{resource_id}", response_model=list[BookingResponse])
async def resource_bookings_on_date(
    resource_id: str,
    on: dt.date = Query(..., alias="date"),
    _user: CurrentUser = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
    cache: BookingCache = Depends(get_booking_cache),
):
    """
    Bookings of one resource on one day.
    Served from Redis when cached; any booking write on the resource invalidates it.
    """
    cached = await cache.get_resource_bookings(resource_id, on)
    if cached is not None:
        logger.info("resource_bookings_cache_hit", resource_id=resource_id, date=str(on))
        return cached

    bookings = await service.list_resource_bookings_on_date(resource_id, on)
    payload = [BookingResponse.model_validate(b).model_dump(mode="json") for b in bookings]
    await cache.set_resource_bookings(resource_id, on, payload)
    return payload


@router.get("/", response_model=list[BookingResponse])
async def list_user_bookings(
    user_id: str = Query(..., min_length=1),
    _user: CurrentUser = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return await service.list_by_user(user_id)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    _user: CurrentUser = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    booking = await service.get(booking_id)
    if booking is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No booking found with id {booking_id}",
        )
    return booking


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: BookingCreate,
    _user: CurrentUser = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """
    Book a resource for a time slot.
    Returns 409 if the slot overlaps an existing booking of the same resource.
    """
    return await service.create(booking_data.model_dump())


@router.put("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_booking(
    booking_id: str,
    booking_data: BookingUpdate,
    _user: CurrentUser = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    outcome = await service.update(booking_id, booking_data.model_dump())
    if outcome is WriteOutcome.NOT_FOUND:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No booking found with id {booking_id}",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_booking(
    booking_id: str,
    _user: CurrentUser = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    if not await service.delete(booking_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No booking found with id {booking_id}",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
