"""
Use Case: List Events

One page of AuthEvents for the event log screen.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Result, Return
from src.app.services.persistence_errors import persistence_error
from src.app.services.unit_of_work import UnitOfWork
from src.domain.event_filter import EventQuery

from .dtos import EventResponse, EventsPageResponse

logger = logging.getLogger(__name__)


class ListEventsUseCase:
    """
    Business Rules:
    - Newest events first
    - Page window is already clamped by the query builder
    - has_more is true while offset + limit < total
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, query: EventQuery) -> Result[EventsPageResponse]:
        async with self.uow:
            try:
                events = await self.uow.auth_events.list_filtered(query.filter, query.window)
                total = await self.uow.auth_events.count(query.filter)
            except SQLAlchemyError as exc:
                logger.exception("Error fetching events")
                return Return.err(persistence_error(exc))

            return Return.ok(
                EventsPageResponse(
                    events=[EventResponse.from_entity(event) for event in events],
                    total=total,
                    limit=query.window.limit,
                    offset=query.window.offset,
                    has_more=query.window.has_more(total),
                )
            )
