"""
Resource endpoints. Deleting a resource clears its future bookings and
resolves its open error reports before the resource itself is removed.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.api.deps import get_error_report_service, get_lifecycle_cascade, get_resource_repository
from app.core.logging import get_logger
from app.core.security import CurrentUser, get_current_user, require_admin
from app.repositories.base import WriteOutcome
from app.repositories.entity_repositories import ResourceRepository
from app.schemas.resource import ResourceCreate, ResourceHealth, ResourceResponse, ResourceUpdate
from app.services.cascade_service import LifecycleCascade
from app.services.error_report_service import ErrorReportService

logger = get_logger(__name__)
router = APIRouter(prefix="/resources", tags=["Resources"])


def _not_found(resource_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"No resource found with id {resource_id}",
    )


@router.get("/", response_model=list[ResourceResponse])
async def list_resources(
    institution_id: str = Query(..., min_length=1),
    _user: CurrentUser = Depends(get_current_user),
    resources: ResourceRepository = Depends(get_resource_repository),
):
    return await resources.list_by("institution_id", institution_id)


@router.get("/{resource_id}", response_model=ResourceResponse)
async def get_resource(
    resource_id: str,
    _user: CurrentUser = Depends(get_current_user),
    resources: ResourceRepository = Depends(get_resource_repository),
):
    resource = await resources.get(resource_id)
    if resource is None:
        raise _not_found(resource_id)
    return resource


@router.get("/{resource_id}/health", response_model=ResourceHealth)
async def get_resource_health(
    resource_id: str,
    _user: CurrentUser = Depends(get_current_user),
    error_reports: ErrorReportService = Depends(get_error_report_service),
):
    """Whether the resource has unresolved error reports."""
    return ResourceHealth(
        resource_id=resource_id,
        has_active_error_reports=await error_reports.any_active_on_resource(resource_id),
    )


@router.post("/", response_model=ResourceResponse, status_code=status.HTTP_201_CREATED)
async def create_resource(
    resource_data: ResourceCreate,
    _admin: CurrentUser = Depends(require_admin),
    resources: ResourceRepository = Depends(get_resource_repository),
):
    resource = await resources.create(resource_data.model_dump())
    logger.info("resource_created", resource_id=resource.id, institution_id=resource.institution_id)
    return resource


@router.put("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_resource(
    resource_id: str,
    resource_data: ResourceUpdate,
    _admin: CurrentUser = Depends(require_admin),
    resources: ResourceRepository = Depends(get_resource_repository),
):
    outcome = await resources.replace(resource_id, resource_data.model_dump())
    if outcome is WriteOutcome.NOT_FOUND:
        raise _not_found(resource_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{resource_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_resource(
    resource_id: str,
    _admin: CurrentUser = Depends(require_admin),
    cascade: LifecycleCascade = Depends(get_lifecycle_cascade),
):
    if not await cascade.delete_resource(resource_id):
        raise _not_found(resource_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
