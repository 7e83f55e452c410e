"""
Dependency factories wiring repositories and services per request.

Long-lived collaborators (Redis-backed cache, blob storage) are created once
at startup and kept on app.state; everything else is built around the
request's database session.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.timeofday import Clock, utc_now
from app.db.session import get_db
from app.repositories.booking_repository import BookingRepository
from app.repositories.entity_repositories import InstitutionRepository, ResourceRepository, UserRepository
from app.repositories.error_report_repository import ErrorReportRepository
from app.services.booking_service import BookingService
from app.services.cache_service import BookingCache
from app.services.cascade_service import LifecycleCascade
from app.services.error_report_service import ErrorReportService
from app.services.interfaces.blob_storage import BlobStorage
from app.services.strategy_factory import get_blob_storage_strategy
from app.services.user_service import UserService


def get_clock() -> Clock:
    return utc_now


def get_booking_cache(request: Request) -> BookingCache:
    cache = getattr(request.app.state, "booking_cache", None)
    return cache if cache is not None else BookingCache(None)


def get_blob_storage(request: Request) -> BlobStorage:
    storage = getattr(request.app.state, "blob_storage", None)
    return storage if storage is not None else get_blob_storage_strategy(get_settings())


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_institution_repository(db: AsyncSession = Depends(get_db)) -> InstitutionRepository:
    return InstitutionRepository(db)


def get_resource_repository(db: AsyncSession = Depends(get_db)) -> ResourceRepository:
    return ResourceRepository(db)


def get_user_service(users: UserRepository = Depends(get_user_repository)) -> UserService:
    return UserService(users)


def get_booking_service(
    db: AsyncSession = Depends(get_db),
    cache: BookingCache = Depends(get_booking_cache),
    clock: Clock = Depends(get_clock),
) -> BookingService:
    return BookingService(BookingRepository(db), cache, clock)


def get_error_report_service(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> ErrorReportService:
    return ErrorReportService(ErrorReportRepository(db), clock)


def get_lifecycle_cascade(
    bookings: BookingService = Depends(get_booking_service),
    error_reports: ErrorReportService = Depends(get_error_report_service),
    resources: ResourceRepository = Depends(get_resource_repository),
    institutions: InstitutionRepository = Depends(get_institution_repository),
) -> LifecycleCascade:
    return LifecycleCascade(bookings, error_reports, resources, institutions)
