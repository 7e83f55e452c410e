"""
Error report endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.api.deps import get_error_report_service
from app.core.security import CurrentUser, get_current_user, require_admin
from app.repositories.base import WriteOutcome
from app.schemas.error_report import (
    ErrorReportCreate,
    ErrorReportResponse,
    ErrorReportUpdate,
    ResolveResponse,
)
from app.services.error_report_service import ErrorReportService

router = APIRouter(prefix="/error-reports", tags=["Error Reports"])


def _not_found(report_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"No error report found with id {report_id}",
    )


@router.get("/", response_model=list[ErrorReportResponse])
async def list_error_reports(
    institution_id: Optional[str] = Query(None, min_length=1),
    resource_id: Optional[str] = Query(None, min_length=1),
    _user: CurrentUser = Depends(get_current_user),
    service: ErrorReportService = Depends(get_error_report_service),
):
    """List reports of an institution (newest first) or of a single resource."""
    if (institution_id is None) == (resource_id is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Exactly one of institution_id or resource_id is required",
        )
    if institution_id is not None:
        return await service.list_by_institution(institution_id)
    return await service.list_by_resource(resource_id)


@router.post("/resolve", response_model=ResolveResponse)
async def resolve_resource_reports(
    resource_id: str = Query(..., min_length=1),
    _admin: CurrentUser = Depends(require_admin),
    service: ErrorReportService = Depends(get_error_report_service),
):
    """Mark every open report on a resource as resolved."""
    resolved_any = await service.resolve_all_on_resource(resource_id)
    return ResolveResponse(resource_id=resource_id, resolved_any=resolved_any)


@router.get("/{report_id}", response_model=ErrorReportResponse)
async def get_error_report(
    report_id: str,
    _user: CurrentUser = Depends(get_current_user),
    service: ErrorReportService = Depends(get_error_report_service),
):
    report = await service.get(report_id)
    if report is None:
        raise _not_found(report_id)
    return report


@router.post("/", response_model=ErrorReportResponse, status_code=status.HTTP_201_CREATED)
async def create_error_report(
    report_data: ErrorReportCreate,
    _user: CurrentUser = Depends(get_current_user),
    service: ErrorReportService = Depends(get_error_report_service),
):
    return await service.create(report_data.model_dump())


@router.put("/{report_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_error_report(
    report_id: str,
    report_data: ErrorReportUpdate,
    _user: CurrentUser = Depends(get_current_user),
    service: ErrorReportService = Depends(get_error_report_service),
):
    outcome = await service.update(report_id, report_data.model_dump())
    if outcome is WriteOutcome.NOT_FOUND:
        raise _not_found(report_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_error_report(
    report_id: str,
    _admin: CurrentUser = Depends(require_admin),
    service: ErrorReportService = Depends(get_error_report_service),
):
    if not await service.delete(report_id):
        raise _not_found(report_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
