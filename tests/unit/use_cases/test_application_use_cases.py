"""
Unit tests for application management use cases

Tests business logic in isolation with mocked repositories.
"""

import pytest
from uuid import uuid4
from unittest.mock import AsyncMock
from src.app.use_cases.applications import (
    CreateApplicationCommand,
    CreateApplicationUseCase,
    DeleteApplicationUseCase,
    GetApplicationUseCase,
    ListApplicationOptionsUseCase,
    ListApplicationsUseCase,
    UpdateApplicationCommand,
    UpdateApplicationUseCase,
)
from src.domain.entities import Application


@pytest.mark.asyncio
async def test_create_application(mock_uow):
    """Name is trimmed and empty description stored as None"""
    mock_uow.applications.get_by_name = AsyncMock(return_value=None)
    mock_uow.applications.create = AsyncMock(side_effect=lambda app: app)

    use_case = CreateApplicationUseCase(mock_uow)
    result = await use_case.execute(CreateApplicationCommand(name="  myapp  ", description=""))

    assert result.is_ok()
    assert result.value.name == "myapp"
    assert result.value.description is None
    assert result.value.event_count == 0
    mock_uow.applications.get_by_name.assert_awaited_once_with("myapp")
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_application_blank_name(mock_uow):
    use_case = CreateApplicationUseCase(mock_uow)
    result = await use_case.execute(CreateApplicationCommand(name="   "))

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    mock_uow.__aenter__.assert_not_called()


@pytest.mark.asyncio
async def test_create_application_duplicate_name(mock_uow):
    mock_uow.applications.get_by_name = AsyncMock(return_value=Application(id=uuid4(), name="myapp"))
    mock_uow.applications.create = AsyncMock()

    use_case = CreateApplicationUseCase(mock_uow)
    result = await use_case.execute(CreateApplicationCommand(name="myapp"))

    assert result.is_err()
    assert result.error.code == "APPLICATION_NAME_EXISTS"
    mock_uow.applications.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_list_applications_with_event_counts(mock_uow):
    first = Application(id=uuid4(), name="beta")
    second = Application(id=uuid4(), name="alpha")
    mock_uow.applications.list_all = AsyncMock(return_value=[first, second])
    mock_uow.applications.event_counts = AsyncMock(return_value={first.id: 4})

    result = await ListApplicationsUseCase(mock_uow).execute()

    assert result.is_ok()
    listed = result.value.applications
    assert [app.name for app in listed] == ["beta", "alpha"]
    assert listed[0].event_count == 4
    assert listed[1].event_count == 0


@pytest.mark.asyncio
async def test_list_application_options(mock_uow):
    alpha = Application(id=uuid4(), name="alpha")
    mock_uow.applications.list_by_name = AsyncMock(return_value=[alpha])

    result = await ListApplicationOptionsUseCase(mock_uow).execute()

    assert result.is_ok()
    assert result.value.applications[0].id == str(alpha.id)
    assert result.value.applications[0].name == "alpha"


@pytest.mark.asyncio
async def test_get_application_not_found(mock_uow):
    mock_uow.applications.get_by_id = AsyncMock(return_value=None)

    result = await GetApplicationUseCase(mock_uow).execute(uuid4())

    assert result.is_err()
    assert result.error.code == "APPLICATION_NOT_FOUND"


@pytest.mark.asyncio
async def test_update_application_renames(mock_uow):
    application = Application(id=uuid4(), name="old")
    mock_uow.applications.get_by_id = AsyncMock(return_value=application)
    mock_uow.applications.get_by_name = AsyncMock(return_value=None)
    mock_uow.applications.update = AsyncMock(side_effect=lambda app: app)
    mock_uow.auth_events.count_by_application = AsyncMock(return_value=2)

    use_case = UpdateApplicationUseCase(mock_uow)
    result = await use_case.execute(
        UpdateApplicationCommand(application_id=application.id, name="new", description="Main site")
    )

    assert result.is_ok()
    assert result.value.name == "new"
    assert result.value.description == "Main site"
    assert result.value.event_count == 2
    assert application.name == "new"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_application_name_taken_by_other(mock_uow):
    application = Application(id=uuid4(), name="old")
    mock_uow.applications.get_by_id = AsyncMock(return_value=application)
    mock_uow.applications.get_by_name = AsyncMock(return_value=Application(id=uuid4(), name="taken"))
    mock_uow.applications.update = AsyncMock()

    use_case = UpdateApplicationUseCase(mock_uow)
    result = await use_case.execute(
        UpdateApplicationCommand(application_id=application.id, name="taken")
    )

    assert result.is_err()
    assert result.error.code == "APPLICATION_NAME_EXISTS"
    mock_uow.applications.update.assert_not_called()


@pytest.mark.asyncio
async def test_update_application_blank_name(mock_uow):
    use_case = UpdateApplicationUseCase(mock_uow)
    result = await use_case.execute(UpdateApplicationCommand(application_id=uuid4(), name="   "))

    assert result.is_err()
    assert result.error.code == "VALIDATION_ERROR"
    mock_uow.__aenter__.assert_not_called()


@pytest.mark.asyncio
async def test_delete_application_with_events_is_refused(mock_uow):
    application = Application(id=uuid4(), name="myapp")
    mock_uow.applications.get_by_id = AsyncMock(return_value=application)
    mock_uow.auth_events.count_by_application = AsyncMock(return_value=3)
    mock_uow.applications.delete = AsyncMock()

    result = await DeleteApplicationUseCase(mock_uow).execute(application.id)

    assert result.is_err()
    assert result.error.code == "APPLICATION_HAS_EVENTS"
    assert result.error.message == "Cannot delete application with 3 associated event(s)"
    mock_uow.applications.delete.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_delete_application_without_events(mock_uow):
    application = Application(id=uuid4(), name="myapp")
    mock_uow.applications.get_by_id = AsyncMock(return_value=application)
    mock_uow.auth_events.count_by_application = AsyncMock(return_value=0)
    mock_uow.applications.delete = AsyncMock()

    result = await DeleteApplicationUseCase(mock_uow).execute(application.id)

    assert result.is_ok()
    assert result.value.status == "deleted"
    mock_uow.applications.delete.assert_awaited_once_with(application)
    mock_uow.commit.assert_awaited_once()
