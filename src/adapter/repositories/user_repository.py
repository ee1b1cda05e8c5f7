from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _first(self, *conditions) -> Optional[User]:
        result = await self.session.exec(select(User).where(*conditions))
        return result.one_or_none()

    async def _save(self, user: User) -> User:
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        return await self._first(User.id == user_id)

    async def get_by_auth_user_id(self, auth_user_id: str) -> Optional[User]:
        """Lookup by provider subject id; the column is unique"""
        return await self._first(User.auth_user_id == auth_user_id)

    async def create(self, user: User) -> User:
        return await self._save(user)

    async def update(self, user: User) -> User:
        """Flush profile changes; the caller owns the transaction"""
        return await self._save(user)
