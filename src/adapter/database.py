"""
Database handle

Owns the async engine and session factory. Created once by the app factory,
kept on ``app.state`` and disposed at shutdown.
"""

import logging

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain.entities  # noqa: F401  registers tables on SQLModel.metadata

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, db_uri: str, echo: bool = False):
        self.engine = create_async_engine(db_uri, echo=echo, future=True)
        self.session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

    async def create_all(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database tables ensured")

    async def dispose(self):
        await self.engine.dispose()
        logger.info("Database engine disposed")
