"""
Error report store: CRUD plus active-report queries and bulk resolve.
"""

from sqlalchemy import select, update

from app.models.error_report import ErrorReport
from app.models.resource import Resource
from app.repositories.base import SqlRepository


class ErrorReportRepository(SqlRepository[ErrorReport]):
    model = ErrorReport

    async def list_by_resource(self, resource_id: str) -> list[ErrorReport]:
        return await self.list_by("resource_id", resource_id)

    async def list_by_institution(self, institution_id: str) -> list[ErrorReport]:
        # Reports only know their resource; the institution comes from it
        owned_resources = select(Resource.id).where(Resource.institution_id == institution_id)
        result = await self.db.execute(
            select(ErrorReport)
            .where(ErrorReport.resource_id.in_(owned_resources))
            .order_by(ErrorReport.created_date.desc())
        )
        return list(result.scalars().all())

    async def list_active_on_resource(self, resource_id: str) -> list[ErrorReport]:
        result = await self.db.execute(
            select(ErrorReport).where(
                ErrorReport.resource_id == resource_id,
                ErrorReport.resolved.is_(False),
            )
        )
        return list(result.scalars().all())

    async def resolve_on_resource(self, resource_id: str) -> int:
        return await self._execute_write(
            update(ErrorReport)
            .where(
                ErrorReport.resource_id == resource_id,
                ErrorReport.resolved.is_(False),
            )
            .values(resolved=True)
        )
