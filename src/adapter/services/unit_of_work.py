import logging

from sqlalchemy import text
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.application_repository import ApplicationRepository
from src.adapter.repositories.auth_event_repository import AuthEventRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.applications = ApplicationRepository(self.session)
        self.users = UserRepository(self.session)
        self.auth_events = AuthEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def begin_serializable(self, max_wait_ms: int):
        connection = await self.session.connection(
            execution_options={"isolation_level": "SERIALIZABLE"}
        )
        dialect = connection.dialect.name
        if dialect == "postgresql":
            await connection.execute(text(f"SET LOCAL lock_timeout = {int(max_wait_ms)}"))
        elif dialect == "sqlite":
            await connection.execute(text(f"PRAGMA busy_timeout = {int(max_wait_ms)}"))
        else:
            logger.debug(f"No lock wait bound applied for dialect {dialect}")

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
