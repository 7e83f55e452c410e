"""
Authentication endpoint: login.
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_user_repository
from app.repositories.entity_repositories import UserRepository
from app.schemas.user import LoginResponse, UserLogin
from app.services.auth_service import authenticate_user

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(login_data: UserLogin, users: UserRepository = Depends(get_user_repository)):
    """Authenticate and receive a JWT access token carrying the user's role."""
    return await authenticate_user(users, login_data)
