import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    """
    UnitOfWork double. Repository methods are attached per test with
    AsyncMock; entering and leaving the block never suppresses exceptions.
    """
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.applications = MagicMock(name="applications")
    uow.users = MagicMock(name="users")
    uow.auth_events = MagicMock(name="auth_events")
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.begin_serializable = AsyncMock()
    return uow
