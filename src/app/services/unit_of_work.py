from abc import ABC, abstractmethod

from src.app.repositories.application_repository import IApplicationRepository
from src.app.repositories.auth_event_repository import IAuthEventRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    applications: IApplicationRepository
    users: IUserRepository
    auth_events: IAuthEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def begin_serializable(self, max_wait_ms: int):
        """
        Start the current transaction under SERIALIZABLE isolation.

        Must be called before any other statement of the transaction.
        max_wait_ms bounds how long a statement may wait on a lock.
        """
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
