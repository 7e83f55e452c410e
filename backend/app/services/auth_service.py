"""
Authentication service: exchange a username/password for a signed token.
"""

from datetime import timedelta

from fastapi import HTTPException, status

from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.security import create_access_token, verify_password
from app.repositories.entity_repositories import UserRepository
from app.schemas.user import LoginResponse, UserLogin

logger = get_logger(__name__)


async def authenticate_user(users: UserRepository, login_data: UserLogin) -> LoginResponse:
    """
    Authenticate user and return a JWT carrying the user's role.
    Raises 401 if credentials are invalid.
    """
    if not login_data.username.strip() or not login_data.password:
        raise _invalid_credentials()

    user = await users.get_by_username(login_data.username)
    if not user or not verify_password(login_data.password, user.hashed_password):
        logger.warning("login_failed", username=login_data.username)
        raise _invalid_credentials()

    expires_in = timedelta(minutes=get_settings().ACCESS_TOKEN_EXPIRE_MINUTES)
    token = create_access_token(data={"sub": user.id, "role": user.role}, expires_delta=expires_in)
    logger.info("user_logged_in", user_id=user.id, role=user.role)

    return LoginResponse(
        user_id=user.id,
        name=user.name,
        institution_id=user.institution_id,
        user_role=user.role,
        access_token=token,
        expires_in=int(expires_in.total_seconds()),
    )


def _invalid_credentials() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid username or password",
        headers={"WWW-Authenticate": "Bearer"},
    )
