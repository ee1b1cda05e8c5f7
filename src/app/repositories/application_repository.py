from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from uuid import UUID

from src.domain.entities import Application


class IApplicationRepository(ABC):
    """Application repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, application_id: UUID) -> Optional[Application]:
        """Get application by ID"""
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Application]:
        """Get application by its unique name"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Application]:
        """All applications, newest first"""
        pass

    @abstractmethod
    async def list_by_name(self) -> List[Application]:
        """All applications ordered by name (filter options)"""
        pass

    @abstractmethod
    async def event_counts(self) -> Dict[UUID, int]:
        """Number of AuthEvents per application id (applications without events omitted)"""
        pass

    @abstractmethod
    async def create(self, application: Application) -> Application:
        """Create a new application"""
        pass

    @abstractmethod
    async def update(self, application: Application) -> Application:
        """Update existing application"""
        pass

    @abstractmethod
    async def delete(self, application: Application) -> None:
        """Delete an application"""
        pass
