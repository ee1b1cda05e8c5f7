import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain.entities  # noqa: F401
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.database import Database
from src.depends import get_database, get_unit_of_work
from tests.integration.api.helpers import ADMIN_HEADERS

TEST_DB_URI = "sqlite+aiosqlite:///./test.db"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(TEST_DB_URI)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session, monkeypatch):
    from src.api.app import create_app
    from config import ApplicationConfig

    monkeypatch.setattr(ApplicationConfig, "AUTH_DISABLED", False)
    monkeypatch.setattr(ApplicationConfig, "ADMIN_API_KEY", ADMIN_HEADERS["X-Admin-API-Key"])
    monkeypatch.setattr(ApplicationConfig, "API_PREFIX", "/api")
    monkeypatch.setattr(ApplicationConfig, "ENABLE_LOGGING_MIDDLEWARE", True)

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    test_database = Database(TEST_DB_URI)
    app.dependency_overrides[get_database] = lambda: test_database

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await test_database.dispose()
