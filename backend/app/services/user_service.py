"""
User management. Passwords are hashed on the way in and never leave the
service layer (UserResponse has no credential fields).
"""

from typing import Any, Optional

from fastapi import HTTPException, status

from app.core.logging import get_logger
from app.core.security import ROLE_USER, CurrentUser, hash_password
from app.models.user import User
from app.repositories.base import WriteOutcome
from app.repositories.entity_repositories import UserRepository
from app.schemas.user import UserCreate, UserUpdate

logger = get_logger(__name__)


class UserService:
    def __init__(self, users: UserRepository):
        self.users = users

    async def get(self, user_id: str) -> Optional[User]:
        return await self.users.get(user_id)

    async def list_by_institution(self, institution_id: str) -> list[User]:
        return await self.users.list_by("institution_id", institution_id)

    async def create(self, user_data: UserCreate, caller: Optional[CurrentUser]) -> User:
        """Register a user. Only an admin may hand out a role other than `user`."""
        await self._ensure_username_free(user_data.username)

        data = user_data.model_dump(exclude={"password"})
        data["hashed_password"] = hash_password(user_data.password)
        if caller is None or not caller.is_admin:
            data["role"] = ROLE_USER

        user = await self.users.create(data)
        logger.info("user_registered", user_id=user.id, role=user.role)
        return user

    async def update(self, user_id: str, user_data: UserUpdate, caller: CurrentUser) -> WriteOutcome:
        existing = await self.users.get(user_id)
        if existing is None:
            return WriteOutcome.NOT_FOUND
        if existing.username != user_data.username:
            await self._ensure_username_free(user_data.username)

        data: dict[str, Any] = user_data.model_dump(exclude={"password"})
        if user_data.password:
            data["hashed_password"] = hash_password(user_data.password)
        if not caller.is_admin:
            data["role"] = existing.role

        return await self.users.replace(user_id, data)

    async def delete(self, user_id: str) -> bool:
        return await self.users.delete(user_id)

    async def _ensure_username_free(self, username: str) -> None:
        if await self.users.get_by_username(username):
            logger.warning("registration_failed", reason="username_exists", username=username)
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Username already taken",
            )
