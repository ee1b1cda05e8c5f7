"""
Use Case: Delete Events

Explicit bulk purge of AuthEvents matching a filter. This is the only path
that removes AuthEvents.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from src.app.services.persistence_errors import persistence_error
from src.app.services.unit_of_work import UnitOfWork
from src.domain.event_filter import EventFilter

from .dtos import DeleteEventsResponse

logger = logging.getLogger(__name__)

MAX_DELETE_LIMIT = 10000


class DeleteEventsUseCase:
    """
    Business Rules:
    - Caller must pass a limit between 1 and MAX_DELETE_LIMIT
    - Oldest matching events are removed first
    - Users and applications are left untouched
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, event_filter: EventFilter, limit: int) -> Result[DeleteEventsResponse]:
        if limit < 1 or limit > MAX_DELETE_LIMIT:
            return Return.err(
                Error(
                    "VALIDATION_ERROR",
                    f"Limit must be between 1 and {MAX_DELETE_LIMIT}",
                )
            )

        async with self.uow:
            try:
                deleted = await self.uow.auth_events.delete_matching(event_filter, limit)
                await self.uow.commit()
            except SQLAlchemyError as exc:
                logger.exception("Error deleting events")
                return Return.err(persistence_error(exc))

            logger.info(f"Deleted {deleted} auth events")
            return Return.ok(DeleteEventsResponse(deleted=deleted))
