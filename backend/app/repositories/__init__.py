from app.repositories.base import SqlRepository, WriteOutcome
from app.repositories.booking_repository import BookingRepository
from app.repositories.error_report_repository import ErrorReportRepository
from app.repositories.entity_repositories import (
    InstitutionRepository,
    ResourceRepository,
    UserRepository,
)

__all__ = [
    "SqlRepository", "WriteOutcome",
    "BookingRepository", "ErrorReportRepository",
    "InstitutionRepository", "ResourceRepository", "UserRepository",
]
