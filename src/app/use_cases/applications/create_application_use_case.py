"""
Use Case: Create Application

Registers a new application whose webhook events will be recorded.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from src.app.services.persistence_errors import persistence_error
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Application

from .dtos import ApplicationResponse, CreateApplicationCommand

logger = logging.getLogger(__name__)


class CreateApplicationUseCase:
    """
    Business Rules:
    - Name is required (whitespace is trimmed)
    - Name must be unique across all applications
    - Empty description is stored as NULL
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: CreateApplicationCommand) -> Result[ApplicationResponse]:
        name = command.name.strip()
        if not name:
            return Return.err(Error("VALIDATION_ERROR", "Application name is required"))

        async with self.uow:
            try:
                existing = await self.uow.applications.get_by_name(name)
                if existing:
                    return Return.err(
                        Error("APPLICATION_NAME_EXISTS", "Application name already exists")
                    )

                application = Application(name=name, description=command.description or None)
                application = await self.uow.applications.create(application)
                await self.uow.commit()
            except SQLAlchemyError as exc:
                logger.exception("Error creating application")
                error = persistence_error(exc)
                if error.code == "ALREADY_EXISTS":
                    return Return.err(
                        Error("APPLICATION_NAME_EXISTS", "Application name already exists")
                    )
                return Return.err(error)

            logger.info(f"Application {application.name} created")
            return Return.ok(ApplicationResponse.from_entity(application))
