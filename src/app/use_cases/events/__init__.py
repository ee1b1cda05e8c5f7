"""
Event Use Cases

Read side of the event log: listing, statistics, trend, export and purge.
"""

from .delete_events_use_case import DeleteEventsUseCase
from .dtos import (
    DeleteEventsResponse,
    EventResponse,
    EventsPageResponse,
    EventStatsResponse,
    EventTrendResponse,
    ExportEventsCommand,
    ExportEventsResponse,
)
from .export_events_use_case import ExportEventsUseCase
from .get_event_stats_use_case import GetEventStatsUseCase
from .get_event_trend_use_case import GetEventTrendUseCase
from .list_events_use_case import ListEventsUseCase

__all__ = [
    "ListEventsUseCase",
    "GetEventStatsUseCase",
    "GetEventTrendUseCase",
    "DeleteEventsUseCase",
    "ExportEventsUseCase",
    "EventResponse",
    "EventsPageResponse",
    "EventStatsResponse",
    "EventTrendResponse",
    "DeleteEventsResponse",
    "ExportEventsCommand",
    "ExportEventsResponse",
]
