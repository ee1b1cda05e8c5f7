"""
Event Filter and Pagination

Turns the loosely-typed criteria a dashboard sends (optional ids, free text,
date strings) into an immutable EventFilter plus a bounded PageWindow.
"""

import logging
from datetime import UTC, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100


class EventFilterCriteria(BaseModel):
    """Raw filter input; every field optional, dates as received"""

    application_id: Optional[UUID] = None
    event_type: Optional[str] = None
    user_id: Optional[UUID] = None
    search: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class EventFilter(BaseModel):
    """Normalized, immutable predicate over AuthEvents"""

    model_config = ConfigDict(frozen=True)

    application_id: Optional[UUID] = None
    event_type: Optional[str] = None
    user_id: Optional[UUID] = None
    search: Optional[str] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def narrowed(self, start: datetime) -> "EventFilter":
        """Copy whose lower bound is the later of the current one and start"""
        if self.start is not None and self.start > start:
            return self
        return self.model_copy(update={"start": start})


class PageWindow(BaseModel):
    model_config = ConfigDict(frozen=True)

    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0

    def has_more(self, total: int) -> bool:
        return self.offset + self.limit < total


class EventQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    filter: EventFilter
    window: PageWindow


def parse_filter_date(value: Optional[str], end_of_day: bool = False) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime into naive UTC.

    Unparseable input is treated as absent. With end_of_day the result is
    moved to 23:59:59.999 of its calendar day so the bound is inclusive.
    """
    if value is None or not value.strip():
        return None

    try:
        parsed = datetime.fromisoformat(value.strip())
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    except (ValueError, OverflowError):
        # OverflowError: offset pushes the instant outside datetime's range
        logger.debug(f"Ignoring unparseable filter date: {value!r}")
        return None

    if end_of_day:
        parsed = parsed.replace(hour=23, minute=59, second=59, microsecond=999000)
    return parsed


def build_event_filter(criteria: EventFilterCriteria) -> EventFilter:
    search = criteria.search.strip() if criteria.search else None
    event_type = criteria.event_type.strip() if criteria.event_type else None

    return EventFilter(
        application_id=criteria.application_id,
        event_type=event_type or None,
        user_id=criteria.user_id,
        search=search or None,
        start=parse_filter_date(criteria.start_date),
        end=parse_filter_date(criteria.end_date, end_of_day=True),
    )


def build_page_window(
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    page: Optional[int] = None,
) -> PageWindow:
    """
    Clamp limit to [1, MAX_PAGE_SIZE] and derive the offset.

    An explicit offset wins over the 1-based page number; either way the
    result is never negative.
    """
    if limit is None:
        limit = DEFAULT_PAGE_SIZE
    limit = max(1, min(MAX_PAGE_SIZE, limit))

    if offset is None:
        offset = (page - 1) * limit if page is not None else 0
    offset = max(0, offset)

    return PageWindow(limit=limit, offset=offset)


def build_event_query(
    criteria: EventFilterCriteria,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    page: Optional[int] = None,
) -> EventQuery:
    return EventQuery(
        filter=build_event_filter(criteria),
        window=build_page_window(limit=limit, offset=offset, page=page),
    )
