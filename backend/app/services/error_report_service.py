"""
Error report tracking: filing, listing, and the active/resolved lifecycle.
"""

from typing import Any, Optional

from app.core.logging import get_logger
from app.core.metrics import error_reports_resolved
from app.core.timeofday import Clock, utc_now
from app.models.error_report import ErrorReport
from app.repositories.base import WriteOutcome
from app.repositories.error_report_repository import ErrorReportRepository

logger = get_logger(__name__)


class ErrorReportService:
    def __init__(self, reports: ErrorReportRepository, clock: Clock = utc_now):
        self.reports = reports
        self.clock = clock

    async def get(self, report_id: str) -> Optional[ErrorReport]:
        return await self.reports.get(report_id)

    async def list_by_institution(self, institution_id: str) -> list[ErrorReport]:
        return await self.reports.list_by_institution(institution_id)

    async def list_by_resource(self, resource_id: str) -> list[ErrorReport]:
        return await self.reports.list_by_resource(resource_id)

    async def create(self, data: dict[str, Any]) -> ErrorReport:
        data = {k: v for k, v in data.items() if k != "id"}
        if data.get("created_date") is None:
            data["created_date"] = self.clock()

        report = await self.reports.create(data)
        logger.info("error_report_created", report_id=report.id, resource_id=report.resource_id)
        return report

    async def update(self, report_id: str, data: dict[str, Any]) -> WriteOutcome:
        if data.get("created_date") is None:
            # Filing date is kept unless explicitly replaced
            data = {k: v for k, v in data.items() if k != "created_date"}
        return await self.reports.replace(report_id, data)

    async def delete(self, report_id: str) -> bool:
        return await self.reports.delete(report_id)

    async def any_active_on_resource(self, resource_id: str) -> bool:
        active = await self.reports.list_active_on_resource(resource_id)
        return len(active) > 0

    async def resolve_all_on_resource(self, resource_id: str) -> bool:
        resolved = await self.reports.resolve_on_resource(resource_id)
        error_reports_resolved.inc(resolved)
        logger.info("error_reports_resolved", resource_id=resource_id, resolved=resolved)
        return resolved > 0
