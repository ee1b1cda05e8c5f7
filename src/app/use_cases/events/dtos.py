"""
Event Use Case DTOs (Data Transfer Objects)

Read-side projections of AuthEvents and the export command/response.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import AuthEvent, ExportType


class EventApplication(BaseModel):
    id: str
    name: str


class EventUser(BaseModel):
    id: str
    auth_user_id: str
    first_name: Optional[str]
    last_name: Optional[str]
    image: Optional[str]


class EventResponse(BaseModel):
    """AuthEvent with its application and user projections"""

    id: str
    event_type: str
    created_at: str
    application: Optional[EventApplication]
    user: Optional[EventUser]

    @classmethod
    def from_entity(cls, event: AuthEvent) -> "EventResponse":
        application = None
        if event.application is not None:
            application = EventApplication(
                id=str(event.application.id), name=event.application.name
            )

        user = None
        if event.user is not None:
            user = EventUser(
                id=str(event.user.id),
                auth_user_id=event.user.auth_user_id,
                first_name=event.user.first_name,
                last_name=event.user.last_name,
                image=event.user.image,
            )

        return cls(
            id=str(event.id),
            event_type=event.event_type,
            created_at=event.created_at.isoformat() + "Z",
            application=application,
            user=user,
        )


class EventsPageResponse(BaseModel):
    events: List[EventResponse]
    total: int
    limit: int
    offset: int
    has_more: bool


class EventTypeCount(BaseModel):
    type: str
    count: int


class EventStatsResponse(BaseModel):
    total_events: int
    events_by_type: List[EventTypeCount]
    recent_activity: List[EventResponse]
    today_count: int
    week_count: int
    unique_users: int


class TrendPoint(BaseModel):
    date: str
    count: int


class EventTrendResponse(BaseModel):
    days: int
    trend: List[TrendPoint]


class DeleteEventsResponse(BaseModel):
    deleted: int


class ExportEventsCommand(BaseModel):
    application_id: Optional[UUID] = None
    user_id: Optional[UUID] = None
    event_type: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    export_type: ExportType = ExportType.full


class ExportEventsResponse(BaseModel):
    content: bytes
    filename: str
    count: int
