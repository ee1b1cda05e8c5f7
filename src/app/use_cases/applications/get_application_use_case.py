"""
Use Case: Get Application
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from src.app.services.persistence_errors import persistence_error
from src.app.services.unit_of_work import UnitOfWork

from .dtos import ApplicationResponse

logger = logging.getLogger(__name__)


class GetApplicationUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, application_id: UUID) -> Result[ApplicationResponse]:
        async with self.uow:
            try:
                application = await self.uow.applications.get_by_id(application_id)
                if not application:
                    return Return.err(Error("APPLICATION_NOT_FOUND", "Application not found"))

                event_count = await self.uow.auth_events.count_by_application(application.id)
            except SQLAlchemyError as exc:
                logger.exception("Error fetching application")
                return Return.err(persistence_error(exc))

            return Return.ok(ApplicationResponse.from_entity(application, event_count))
