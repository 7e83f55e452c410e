"""
Stores for the entities without scheduling-specific queries.
"""

from typing import Optional

from sqlalchemy import select

from app.models.institution import Institution
from app.models.resource import Resource
from app.models.user import User
from app.repositories.base import SqlRepository


class UserRepository(SqlRepository[User]):
    model = User

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()


class InstitutionRepository(SqlRepository[Institution]):
    model = Institution


class ResourceRepository(SqlRepository[Resource]):
    model = Resource
