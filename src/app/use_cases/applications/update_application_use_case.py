"""
Use Case: Update Application

Renames an application or changes its description.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from src.app.services.persistence_errors import persistence_error
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

from .dtos import ApplicationResponse, UpdateApplicationCommand

logger = logging.getLogger(__name__)


class UpdateApplicationUseCase:
    """
    Business Rules:
    - Name is required (whitespace is trimmed)
    - New name must not belong to another application
    - Renaming changes the webhook route and secret name of the application
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: UpdateApplicationCommand) -> Result[ApplicationResponse]:
        name = command.name.strip()
        if not name:
            return Return.err(Error("VALIDATION_ERROR", "Application name is required"))

        async with self.uow:
            try:
                application = await self.uow.applications.get_by_id(command.application_id)
                if not application:
                    return Return.err(Error("APPLICATION_NOT_FOUND", "Application not found"))

                existing = await self.uow.applications.get_by_name(name)
                if existing and existing.id != application.id:
                    return Return.err(
                        Error("APPLICATION_NAME_EXISTS", "Application name already exists")
                    )

                application.name = name
                application.description = command.description or None
                application.updated_at = utcnow()
                application = await self.uow.applications.update(application)
                event_count = await self.uow.auth_events.count_by_application(application.id)
                await self.uow.commit()
            except SQLAlchemyError as exc:
                logger.exception("Error updating application")
                error = persistence_error(exc)
                if error.code == "ALREADY_EXISTS":
                    return Return.err(
                        Error("APPLICATION_NAME_EXISTS", "Application name already exists")
                    )
                return Return.err(error)

            return Return.ok(ApplicationResponse.from_entity(application, event_count))
