"""
Use Case: Get Event Trend

Daily event counts for the trend chart, one entry per calendar day.
"""

import logging
from datetime import datetime, time, timedelta

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Result, Return
from src.app.services.persistence_errors import persistence_error
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.event_filter import EventFilter

from .dtos import EventTrendResponse, TrendPoint

logger = logging.getLogger(__name__)

DEFAULT_TREND_DAYS = 30
MAX_TREND_DAYS = 365


class GetEventTrendUseCase:
    """
    The window runs from `days` days ago through today (UTC), both included,
    so it always has days + 1 entries. Days without events report 0.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, event_filter: EventFilter, days: int = DEFAULT_TREND_DAYS
    ) -> Result[EventTrendResponse]:
        days = max(1, min(MAX_TREND_DAYS, days))
        today = utcnow().date()
        first_day = today - timedelta(days=days)

        buckets = {
            (first_day + timedelta(days=offset)).isoformat(): 0 for offset in range(days + 1)
        }

        async with self.uow:
            try:
                timestamps = await self.uow.auth_events.list_timestamps(
                    event_filter.narrowed(datetime.combine(first_day, time.min))
                )
            except SQLAlchemyError as exc:
                logger.exception("Error fetching event trend")
                return Return.err(persistence_error(exc))

        for created_at in timestamps:
            key = created_at.date().isoformat()
            if key in buckets:
                buckets[key] += 1

        return Return.ok(
            EventTrendResponse(
                days=days,
                trend=[TrendPoint(date=day, count=count) for day, count in buckets.items()],
            )
        )
