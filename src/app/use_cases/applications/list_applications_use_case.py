"""
Use Case: List Applications

Management screen listing (newest first, with event counts) and the
name-ordered options used by event filters.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Result, Return
from src.app.services.persistence_errors import persistence_error
from src.app.services.unit_of_work import UnitOfWork

from .dtos import (
    ApplicationListResponse,
    ApplicationOption,
    ApplicationOptionsResponse,
    ApplicationResponse,
)

logger = logging.getLogger(__name__)


class ListApplicationsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[ApplicationListResponse]:
        async with self.uow:
            try:
                applications = await self.uow.applications.list_all()
                counts = await self.uow.applications.event_counts()
            except SQLAlchemyError as exc:
                logger.exception("Error fetching applications")
                return Return.err(persistence_error(exc))

            return Return.ok(
                ApplicationListResponse(
                    applications=[
                        ApplicationResponse.from_entity(application, counts.get(application.id, 0))
                        for application in applications
                    ]
                )
            )


class ListApplicationOptionsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[ApplicationOptionsResponse]:
        async with self.uow:
            try:
                applications = await self.uow.applications.list_by_name()
            except SQLAlchemyError as exc:
                logger.exception("Error fetching applications for filter")
                return Return.err(persistence_error(exc))

            return Return.ok(
                ApplicationOptionsResponse(
                    applications=[
                        ApplicationOption(id=str(application.id), name=application.name)
                        for application in applications
                    ]
                )
            )
