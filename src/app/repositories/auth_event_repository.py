from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Tuple
from uuid import UUID

from src.domain.entities import AuthEvent
from src.domain.event_filter import EventFilter, PageWindow


class IAuthEventRepository(ABC):
    """AuthEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, auth_event: AuthEvent) -> AuthEvent:
        """Create a new auth event (immutable)"""
        pass

    @abstractmethod
    async def list_filtered(
        self, event_filter: EventFilter, window: PageWindow
    ) -> List[AuthEvent]:
        """
        Matching events ordered by created_at DESC, limited to the window.

        Events are returned with application and user loaded.
        """
        pass

    @abstractmethod
    async def count(self, event_filter: EventFilter) -> int:
        """Number of matching events"""
        pass

    @abstractmethod
    async def count_by_type(self, event_filter: EventFilter) -> List[Tuple[str, int]]:
        """(event_type, count) pairs ordered by count DESC"""
        pass

    @abstractmethod
    async def count_distinct_users(self, event_filter: EventFilter) -> int:
        """Number of distinct users among matching events"""
        pass

    @abstractmethod
    async def count_by_application(self, application_id: UUID) -> int:
        """Number of events recorded for one application"""
        pass

    @abstractmethod
    async def list_timestamps(self, event_filter: EventFilter) -> List[datetime]:
        """created_at of every matching event"""
        pass

    @abstractmethod
    async def delete_matching(self, event_filter: EventFilter, limit: int) -> int:
        """Delete at most `limit` matching events, oldest first; returns deleted count"""
        pass
