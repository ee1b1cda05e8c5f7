"""
Use Case: Delete Application

Removes an application that has never received events.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from src.app.services.persistence_errors import persistence_error
from src.app.services.unit_of_work import UnitOfWork

from .dtos import DeleteApplicationResponse

logger = logging.getLogger(__name__)


class DeleteApplicationUseCase:
    """
    Business Rules:
    - Application must exist
    - Applications with AuthEvents cannot be deleted; the error names the
      number of events so the operator knows what to purge first
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, application_id: UUID) -> Result[DeleteApplicationResponse]:
        async with self.uow:
            try:
                application = await self.uow.applications.get_by_id(application_id)
                if not application:
                    return Return.err(Error("APPLICATION_NOT_FOUND", "Application not found"))

                event_count = await self.uow.auth_events.count_by_application(application.id)
                if event_count > 0:
                    return Return.err(
                        Error(
                            "APPLICATION_HAS_EVENTS",
                            f"Cannot delete application with {event_count} associated event(s)",
                        )
                    )

                await self.uow.applications.delete(application)
                await self.uow.commit()
            except SQLAlchemyError as exc:
                logger.exception("Error deleting application")
                return Return.err(persistence_error(exc))

            logger.info(f"Application {application.name} deleted")
            return Return.ok(DeleteApplicationResponse(status="deleted"))
