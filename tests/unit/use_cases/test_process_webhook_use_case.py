"""
Unit tests for ProcessWebhookUseCase

Tests verification order and event dispatch with a mocked UnitOfWork.
"""

import asyncio
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from src.app.use_cases.webhooks import ProcessWebhookCommand, ProcessWebhookUseCase
from src.domain.entities import Application, AuthEvent, User
from tests.fixtures.json_loader import WebhookFixtures
from tests.utils.signing import signed_delivery

SECRET = WebhookFixtures.secret()


def make_command(payload, secret=SECRET, **overrides) -> ProcessWebhookCommand:
    body, headers = signed_delivery(SECRET, payload)
    fields = dict(
        app_name="myapp",
        body=body,
        svix_id=headers["svix-id"],
        svix_timestamp=headers["svix-timestamp"],
        svix_signature=headers["svix-signature"],
        secret=secret,
    )
    fields.update(overrides)
    return ProcessWebhookCommand(**fields)


@pytest.fixture
def application():
    return Application(id=uuid4(), name="myapp")


@pytest.fixture
def existing_user():
    return User(id=uuid4(), auth_user_id="user_2abcDEF", first_name="Ada", last_name="Lovelace")


def wire_repositories(mock_uow, application, user):
    mock_uow.applications.get_by_name = AsyncMock(return_value=application)
    mock_uow.users.get_by_auth_user_id = AsyncMock(return_value=user)
    mock_uow.users.create = AsyncMock(side_effect=lambda u: u)
    mock_uow.users.update = AsyncMock(side_effect=lambda u: u)
    mock_uow.auth_events.create = AsyncMock(side_effect=lambda e: e)


@pytest.mark.asyncio
async def test_missing_secret_is_misconfigured(mock_uow):
    use_case = ProcessWebhookUseCase(mock_uow)
    result = await use_case.execute(make_command(WebhookFixtures.payload("session_created"), secret=None))

    assert result.is_err()
    assert result.error.code == "MISCONFIGURED_APPLICATION"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["svix_id", "svix_timestamp", "svix_signature"])
async def test_missing_signature_header(mock_uow, missing):
    use_case = ProcessWebhookUseCase(mock_uow)
    command = make_command(WebhookFixtures.payload("session_created"), **{missing: None})

    result = await use_case.execute(command)

    assert result.is_err()
    assert result.error.code == "MISSING_SIGNATURE_HEADERS"
    mock_uow.__aenter__.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_signature_writes_nothing(mock_uow):
    use_case = ProcessWebhookUseCase(mock_uow)
    command = make_command(
        WebhookFixtures.payload("session_created"),
        svix_signature="v1,dGhpcyBpcyBub3QgdGhlIHNpZ25hdHVyZQ==",
    )

    result = await use_case.execute(command)

    assert result.is_err()
    assert result.error.code == "INVALID_SIGNATURE"
    mock_uow.__aenter__.assert_not_called()


@pytest.mark.asyncio
async def test_body_tampered_after_signing(mock_uow):
    use_case = ProcessWebhookUseCase(mock_uow)
    command = make_command(WebhookFixtures.payload("session_created"))
    command.body = command.body.replace(b"user_2abcDEF", b"user_evil")

    result = await use_case.execute(command)

    assert result.is_err()
    assert result.error.code == "INVALID_SIGNATURE"


@pytest.mark.asyncio
async def test_session_created_records_event(mock_uow, application, existing_user):
    wire_repositories(mock_uow, application, existing_user)
    use_case = ProcessWebhookUseCase(mock_uow)

    result = await use_case.execute(make_command(WebhookFixtures.payload("session_created")))

    assert result.is_ok()
    assert result.value.success is True
    assert result.value.message == "Webhook received"

    mock_uow.applications.get_by_name.assert_awaited_once_with("myapp")
    mock_uow.users.get_by_auth_user_id.assert_awaited_once_with("user_2abcDEF")
    event: AuthEvent = mock_uow.auth_events.create.await_args[0][0]
    assert event.event_type == "session.created"
    assert event.application_id == application.id
    assert event.user_id == existing_user.id
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_session_event_for_unknown_user_is_database_error(mock_uow, application):
    wire_repositories(mock_uow, application, None)
    use_case = ProcessWebhookUseCase(mock_uow)

    result = await use_case.execute(make_command(WebhookFixtures.payload("session_ended")))

    assert result.is_err()
    assert result.error.code == "DATABASE_ERROR"
    mock_uow.auth_events.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_application_is_database_error(mock_uow, existing_user):
    wire_repositories(mock_uow, None, existing_user)
    use_case = ProcessWebhookUseCase(mock_uow)

    result = await use_case.execute(make_command(WebhookFixtures.payload("session_created")))

    assert result.is_err()
    assert result.error.code == "DATABASE_ERROR"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_user_created_creates_unseen_user(mock_uow, application):
    wire_repositories(mock_uow, application, None)
    use_case = ProcessWebhookUseCase(mock_uow)

    result = await use_case.execute(make_command(WebhookFixtures.payload("user_created")))

    assert result.is_ok()
    mock_uow.users.create.assert_awaited_once()
    created: User = mock_uow.users.create.await_args[0][0]
    assert created.auth_user_id == "user_2abcDEF"
    assert created.first_name == "Ada"
    assert created.last_name == "Lovelace"
    assert created.image == "https://img.example.com/ada.png"

    event: AuthEvent = mock_uow.auth_events.create.await_args[0][0]
    assert event.user_id == created.id
    assert event.event_type == "user.created"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_user_created_reuses_existing_user(mock_uow, application, existing_user):
    wire_repositories(mock_uow, application, existing_user)
    use_case = ProcessWebhookUseCase(mock_uow)

    result = await use_case.execute(make_command(WebhookFixtures.payload("user_created")))

    assert result.is_ok()
    mock_uow.users.create.assert_not_called()
    event: AuthEvent = mock_uow.auth_events.create.await_args[0][0]
    assert event.user_id == existing_user.id


@pytest.mark.asyncio
async def test_user_updated_runs_serializable_and_overwrites_profile(
    mock_uow, application, existing_user
):
    wire_repositories(mock_uow, application, existing_user)
    use_case = ProcessWebhookUseCase(mock_uow, max_wait_ms=5000, timeout_ms=10000)

    result = await use_case.execute(make_command(WebhookFixtures.payload("user_updated")))

    assert result.is_ok()
    mock_uow.begin_serializable.assert_awaited_once_with(5000)
    mock_uow.auth_events.create.assert_awaited_once()
    mock_uow.users.update.assert_awaited_once_with(existing_user)
    assert existing_user.first_name == "Augusta"
    assert existing_user.last_name == "King"
    assert existing_user.image == "https://img.example.com/augusta.png"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_user_updated_database_failure_is_not_committed(mock_uow, application, existing_user):
    wire_repositories(mock_uow, application, existing_user)
    mock_uow.users.update = AsyncMock(
        side_effect=OperationalError("UPDATE users", {}, Exception("could not serialize access"))
    )
    use_case = ProcessWebhookUseCase(mock_uow)

    result = await use_case.execute(make_command(WebhookFixtures.payload("user_updated")))

    assert result.is_err()
    assert result.error.code == "DATABASE_ERROR"
    mock_uow.commit.assert_not_called()
    mock_uow.__aexit__.assert_awaited_once()


@pytest.mark.asyncio
async def test_user_updated_timeout_is_database_error(mock_uow, application, existing_user):
    wire_repositories(mock_uow, application, existing_user)

    async def slow_update(user):
        await asyncio.sleep(1)
        return user

    mock_uow.users.update = AsyncMock(side_effect=slow_update)
    use_case = ProcessWebhookUseCase(mock_uow, timeout_ms=50)

    result = await use_case.execute(make_command(WebhookFixtures.payload("user_updated")))

    assert result.is_err()
    assert result.error.code == "DATABASE_ERROR"
    assert result.error.message == "Database operation timed out"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_unrecognized_event_is_acknowledged(mock_uow, application, existing_user):
    wire_repositories(mock_uow, application, existing_user)
    use_case = ProcessWebhookUseCase(mock_uow)

    result = await use_case.execute(make_command(WebhookFixtures.payload("unknown_event")))

    assert result.is_ok()
    mock_uow.auth_events.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_payload_without_required_data_is_rejected(mock_uow):
    use_case = ProcessWebhookUseCase(mock_uow)
    payload = {"type": "session.created", "data": {"id": "sess_1"}}

    result = await use_case.execute(make_command(payload))

    assert result.is_err()
    assert result.error.code == "INVALID_PAYLOAD"
