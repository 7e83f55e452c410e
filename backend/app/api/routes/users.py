"""
User endpoints. Registration is open; everything else needs a token, and
non-admins may only modify their own record.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.api.deps import get_user_service
from app.core.security import CurrentUser, get_current_user, get_optional_user
from app.repositories.base import WriteOutcome
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


def _ensure_self_or_admin(caller: CurrentUser, user_id: str) -> None:
    if not caller.is_admin and caller.id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot modify another user",
        )


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    caller: Optional[CurrentUser] = Depends(get_optional_user),
    service: UserService = Depends(get_user_service),
):
    """Register a new user account. The admin role can only be granted by an admin."""
    return await service.create(user_data, caller)


@router.get("/", response_model=list[UserResponse])
async def list_users(
    institution_id: str = Query(..., min_length=1),
    _user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.list_by_institution(institution_id)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    _user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    user = await service.get(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No user found with id {user_id}")
    return user


@router.put("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_user(
    user_id: str,
    user_data: UserUpdate,
    caller: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    _ensure_self_or_admin(caller, user_id)
    outcome = await service.update(user_id, user_data, caller)
    if outcome is WriteOutcome.NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No user found with id {user_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_user(
    user_id: str,
    caller: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    _ensure_self_or_admin(caller, user_id)
    if not await service.delete(user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No user found with id {user_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
