"""
Use Case: Get Event Stats

Dashboard statistics for one filter.
"""

import logging
from datetime import datetime, time, timedelta

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Result, Return
from src.app.services.persistence_errors import persistence_error
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.event_filter import EventFilter, PageWindow

from .dtos import EventResponse, EventStatsResponse, EventTypeCount

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_SIZE = 10


class GetEventStatsUseCase:
    """
    Every figure is computed from the same filter:
    - total_events: all matches
    - events_by_type: matches grouped by event type, largest first
    - recent_activity: the 10 newest matches
    - today_count: matches since UTC midnight
    - week_count: matches in the trailing 7 days
    - unique_users: distinct users among matches
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, event_filter: EventFilter) -> Result[EventStatsResponse]:
        now = utcnow()
        start_of_today = datetime.combine(now.date(), time.min)
        week_ago = now - timedelta(days=7)

        async with self.uow:
            try:
                events = self.uow.auth_events
                total_events = await events.count(event_filter)
                by_type = await events.count_by_type(event_filter)
                recent = await events.list_filtered(
                    event_filter, PageWindow(limit=RECENT_ACTIVITY_SIZE, offset=0)
                )
                today_count = await events.count(event_filter.narrowed(start_of_today))
                week_count = await events.count(event_filter.narrowed(week_ago))
                unique_users = await events.count_distinct_users(event_filter)
            except SQLAlchemyError as exc:
                logger.exception("Error fetching event stats")
                return Return.err(persistence_error(exc))

            return Return.ok(
                EventStatsResponse(
                    total_events=total_events,
                    events_by_type=[
                        EventTypeCount(type=event_type, count=count)
                        for event_type, count in by_type
                    ],
                    recent_activity=[EventResponse.from_entity(event) for event in recent],
                    today_count=today_count,
                    week_count=week_count,
                    unique_users=unique_users,
                )
            )
