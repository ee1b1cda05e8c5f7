"""
Event API Routes

Event log, statistics, trend chart and bulk purge.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from libs.result import Error
from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.events import (
    DeleteEventsResponse,
    DeleteEventsUseCase,
    EventsPageResponse,
    EventStatsResponse,
    EventTrendResponse,
    GetEventStatsUseCase,
    GetEventTrendUseCase,
    ListEventsUseCase,
)
from src.depends import get_unit_of_work
from src.domain.event_filter import EventFilterCriteria, build_event_filter, build_event_query

router = APIRouter(
    prefix="/events",
    tags=["Events"],
    dependencies=[Depends(verify_admin_api_key)],
)


def event_criteria(
    application_id: Optional[UUID] = Query(None, alias="applicationId"),
    event_type: Optional[str] = Query(None, alias="eventType"),
    user_id: Optional[UUID] = Query(None, alias="userId"),
    search: Optional[str] = Query(None, description="Matches event type or user name"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
) -> EventFilterCriteria:
    return EventFilterCriteria(
        application_id=application_id,
        event_type=event_type,
        user_id=user_id,
        search=search,
        start_date=start_date,
        end_date=end_date,
    )


def _raise_for(error: Error):
    if error.code == "VALIDATION_ERROR":
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ServerError(error)


@router.get("", status_code=status.HTTP_200_OK, response_model=EventsPageResponse)
async def list_events(
    criteria: EventFilterCriteria = Depends(event_criteria),
    limit: Optional[int] = Query(None, description="Page size, clamped to 1-100 (default 50)"),
    offset: Optional[int] = Query(None, description="Rows to skip; wins over page"),
    page: Optional[int] = Query(None, description="1-based page number"),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Events

    Returns matching events newest first with total and has_more.
    Unparseable dates are ignored; endDate includes the whole day.
    """
    query = build_event_query(criteria, limit=limit, offset=offset, page=page)
    result = await ListEventsUseCase(uow).execute(query)
    if result.is_err():
        _raise_for(result.error)
    return result.value


@router.get("/stats", status_code=status.HTTP_200_OK, response_model=EventStatsResponse)
async def get_event_stats(
    criteria: EventFilterCriteria = Depends(event_criteria),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetEventStatsUseCase(uow).execute(build_event_filter(criteria))
    if result.is_err():
        _raise_for(result.error)
    return result.value


@router.get("/trend", status_code=status.HTTP_200_OK, response_model=EventTrendResponse)
async def get_event_trend(
    criteria: EventFilterCriteria = Depends(event_criteria),
    days: int = Query(30, description="Trailing window in days (1-365)"),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Event Trend

    One {date, count} entry per day from `days` days ago through today.
    """
    result = await GetEventTrendUseCase(uow).execute(build_event_filter(criteria), days=days)
    if result.is_err():
        _raise_for(result.error)
    return result.value


@router.delete("", status_code=status.HTTP_200_OK, response_model=DeleteEventsResponse)
async def delete_events(
    limit: int = Query(..., description="Maximum number of events to delete"),
    criteria: EventFilterCriteria = Depends(event_criteria),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Delete Events

    Removes at most `limit` matching events, oldest first.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (limit out of range)
    """
    result = await DeleteEventsUseCase(uow).execute(build_event_filter(criteria), limit)
    if result.is_err():
        _raise_for(result.error)
    return result.value
