"""
Institution endpoints. Updating an institution clears its future bookings
first, since they may no longer fit the new opening hours.
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.api.deps import get_institution_repository, get_lifecycle_cascade
from app.core.logging import get_logger
from app.core.security import CurrentUser, require_admin
from app.repositories.base import WriteOutcome
from app.repositories.entity_repositories import InstitutionRepository
from app.schemas.institution import InstitutionCreate, InstitutionResponse, InstitutionUpdate
from app.services.cascade_service import LifecycleCascade

logger = get_logger(__name__)
router = APIRouter(prefix="/institutions", tags=["Institutions"])


@router.post("/", response_model=InstitutionResponse, status_code=status.HTTP_201_CREATED)
async def create_institution(
    institution_data: InstitutionCreate,
    _admin: CurrentUser = Depends(require_admin),
    institutions: InstitutionRepository = Depends(get_institution_repository),
):
    institution = await institutions.create(institution_data.model_dump())
    logger.info("institution_created", institution_id=institution.id, name=institution.name)
    return institution


@router.get("/{institution_id}", response_model=InstitutionResponse)
async def get_institution(
    institution_id: str,
    institutions: InstitutionRepository = Depends(get_institution_repository),
):
    institution = await institutions.get(institution_id)
    if institution is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No institution found with id {institution_id}",
        )
    return institution


@router.put("/{institution_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_institution(
    institution_id: str,
    institution_data: InstitutionUpdate,
    _admin: CurrentUser = Depends(require_admin),
    cascade: LifecycleCascade = Depends(get_lifecycle_cascade),
):
    """Replace an institution. Its bookings from today on are removed first."""
    outcome = await cascade.update_institution(institution_id, institution_data.model_dump())
    if outcome is WriteOutcome.NOT_FOUND:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No institution found with id {institution_id}",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
