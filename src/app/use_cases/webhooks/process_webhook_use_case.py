"""
Use Case: Process Webhook

Verifies a signed identity-provider delivery and records it.
"""

import asyncio
import json
import logging

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from src.app.services.persistence_errors import (
    DATABASE_ERROR,
    RecordNotFoundError,
    persistence_error,
)
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.webhook_signature import (
    DEFAULT_TOLERANCE_SECONDS,
    WebhookVerificationError,
    WebhookVerifier,
)
from src.domain.base import utcnow
from src.domain.entities import Application, AuthEvent, User
from src.domain.webhook_events import (
    SessionCreatedEvent,
    SessionEndedEvent,
    SessionRemovedEvent,
    SessionRevokedEvent,
    UnrecognizedEvent,
    UserCreatedEvent,
    UserUpdatedEvent,
    WebhookEvent,
    parse_webhook_event,
)

from .dtos import ProcessWebhookCommand, WebhookAck

logger = logging.getLogger(__name__)


class ProcessWebhookUseCase:
    """
    Business Logic:
    1. Application must have a signing secret configured
    2. All three signature headers must be present
    3. Signature must verify (timestamp within tolerance)
    4. Body is parsed into an event variant
    5. Event is recorded according to its type:
       - session.*: AuthEvent linked to existing User and Application
       - user.created: create-or-connect User by auth_user_id, then AuthEvent
       - user.updated: AuthEvent + User profile overwrite in one
         SERIALIZABLE transaction with bounded lock wait and duration
       - anything else: logged and acknowledged
    6. Persistence failures roll back everything and surface as DATABASE_ERROR

    No retry happens here; the provider redelivers failed webhooks.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
        max_wait_ms: int = 5000,
        timeout_ms: int = 10000,
    ):
        self.uow = uow
        self.tolerance_seconds = tolerance_seconds
        self.max_wait_ms = max_wait_ms
        self.timeout_ms = timeout_ms

    async def execute(self, command: ProcessWebhookCommand) -> Result[WebhookAck]:
        if not command.secret:
            logger.error(f"Webhook secret not found for application {command.app_name}")
            return Return.err(
                Error("MISCONFIGURED_APPLICATION", "Webhook secret not found.")
            )

        if not (command.svix_id and command.svix_timestamp and command.svix_signature):
            return Return.err(
                Error("MISSING_SIGNATURE_HEADERS", "Error occurred -- no svix headers")
            )

        try:
            verifier = WebhookVerifier(command.secret, self.tolerance_seconds)
        except WebhookVerificationError as exc:
            logger.error(f"Invalid webhook secret for application {command.app_name}: {exc}")
            return Return.err(
                Error("MISCONFIGURED_APPLICATION", "Webhook secret is invalid.")
            )

        try:
            verifier.verify(
                command.body,
                command.svix_id,
                command.svix_timestamp,
                command.svix_signature,
            )
        except WebhookVerificationError as exc:
            logger.warning(f"Error verifying webhook for {command.app_name}: {exc}")
            return Return.err(
                Error("INVALID_SIGNATURE", "Invalid webhook signature", reason=str(exc))
            )

        try:
            event = parse_webhook_event(json.loads(command.body))
        except ValueError as exc:
            logger.warning(f"Malformed webhook payload for {command.app_name}: {exc}")
            return Return.err(
                Error("INVALID_PAYLOAD", "Malformed webhook payload", reason=str(exc))
            )

        async with self.uow:
            try:
                await self._dispatch(command.app_name, event)
            except (SQLAlchemyError, RecordNotFoundError, TimeoutError) as exc:
                logger.exception(f"Database error while handling {event.type} for {command.app_name}")
                error = persistence_error(exc)
                return Return.err(Error(DATABASE_ERROR, error.message, reason=error.reason))

        return Return.ok(WebhookAck())

    async def _dispatch(self, app_name: str, event: WebhookEvent) -> None:
        if isinstance(event, SessionCreatedEvent):
            await self._record_session_event(app_name, event.type, event.data.user_id)
            logger.info(f"User {event.data.user_id} logged in to {app_name}")
        elif isinstance(event, SessionEndedEvent):
            await self._record_session_event(app_name, event.type, event.data.user_id)
            logger.info(f"User {event.data.user_id} logged out of {app_name}")
        elif isinstance(event, (SessionRevokedEvent, SessionRemovedEvent)):
            await self._record_session_event(app_name, event.type, event.data.user_id)
            logger.info(f"Session of user {event.data.user_id} {event.type.split('.')[1]} in {app_name}")
        elif isinstance(event, UserCreatedEvent):
            await self._record_user_created(app_name, event)
            logger.info(f"User {event.data.id} created in {app_name}")
        elif isinstance(event, UserUpdatedEvent):
            await self._record_user_updated(app_name, event)
            logger.info(f"User {event.data.id} updated in {app_name}")
        elif isinstance(event, UnrecognizedEvent):
            logger.info(f"Unhandled event type: {event.type}")
        else:
            raise TypeError(f"No handler for webhook event {type(event).__name__}")

    async def _get_application(self, app_name: str) -> Application:
        application = await self.uow.applications.get_by_name(app_name)
        if application is None:
            raise RecordNotFoundError("Application", app_name)
        return application

    async def _get_user(self, auth_user_id: str) -> User:
        user = await self.uow.users.get_by_auth_user_id(auth_user_id)
        if user is None:
            raise RecordNotFoundError("User", auth_user_id)
        return user

    async def _record_session_event(self, app_name: str, event_type: str, auth_user_id: str):
        application = await self._get_application(app_name)
        user = await self._get_user(auth_user_id)

        await self.uow.auth_events.create(
            AuthEvent(event_type=event_type, application_id=application.id, user_id=user.id)
        )
        await self.uow.commit()

    async def _record_user_created(self, app_name: str, event: UserCreatedEvent):
        application = await self._get_application(app_name)

        # Create-or-connect: a replayed user.created reuses the existing row
        user = await self.uow.users.get_by_auth_user_id(event.data.id)
        if user is None:
            user = await self.uow.users.create(
                User(
                    auth_user_id=event.data.id,
                    first_name=event.data.first_name,
                    last_name=event.data.last_name,
                    image=event.data.image_url,
                )
            )

        await self.uow.auth_events.create(
            AuthEvent(event_type=event.type, application_id=application.id, user_id=user.id)
        )
        await self.uow.commit()

    async def _record_user_updated(self, app_name: str, event: UserUpdatedEvent):
        async with asyncio.timeout(self.timeout_ms / 1000):
            await self.uow.begin_serializable(self.max_wait_ms)

            application = await self._get_application(app_name)
            user = await self._get_user(event.data.id)

            await self.uow.auth_events.create(
                AuthEvent(event_type=event.type, application_id=application.id, user_id=user.id)
            )

            user.first_name = event.data.first_name
            user.last_name = event.data.last_name
            user.image = event.data.image_url
            user.updated_at = utcnow()
            await self.uow.users.update(user)

            await self.uow.commit()
