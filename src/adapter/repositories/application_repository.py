from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.application_repository import IApplicationRepository
from src.domain.entities import Application, AuthEvent


class ApplicationRepository(IApplicationRepository):
    """Application repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, application_id: UUID) -> Optional[Application]:
        """Get application by ID"""
        stmt = select(Application).where(Application.id == application_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_name(self, name: str) -> Optional[Application]:
        """Get application by its unique name"""
        stmt = select(Application).where(Application.name == name)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_all(self) -> List[Application]:
        stmt = select(Application).order_by(Application.created_at.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_by_name(self) -> List[Application]:
        stmt = select(Application).order_by(Application.name)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def event_counts(self) -> Dict[UUID, int]:
        stmt = select(AuthEvent.application_id, func.count(AuthEvent.id)).group_by(
            AuthEvent.application_id
        )
        result = await self.session.exec(stmt)
        return {application_id: count for application_id, count in result.all()}

    async def create(self, application: Application) -> Application:
        """Create a new application"""
        self.session.add(application)
        await self.session.flush()
        await self.session.refresh(application)
        return application

    async def update(self, application: Application) -> Application:
        """Update existing application"""
        self.session.add(application)
        await self.session.flush()
        await self.session.refresh(application)
        return application

    async def delete(self, application: Application) -> None:
        await self.session.delete(application)
        await self.session.flush()
