"""
Webhook Event Variants

Payloads sent by the identity provider, one model per event type. The ``type``
field selects the variant; anything the service does not know about becomes an
UnrecognizedEvent so the caller can acknowledge it without recording it.
"""

from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

from .entities.enums import EventType


class SessionEventData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    user_id: str


class UserEventData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    image_url: Optional[str] = None


class SessionCreatedEvent(BaseModel):
    type: Literal["session.created"]
    data: SessionEventData


class SessionEndedEvent(BaseModel):
    type: Literal["session.ended"]
    data: SessionEventData


class SessionRevokedEvent(BaseModel):
    type: Literal["session.revoked"]
    data: SessionEventData


class SessionRemovedEvent(BaseModel):
    type: Literal["session.removed"]
    data: SessionEventData


class UserCreatedEvent(BaseModel):
    type: Literal["user.created"]
    data: UserEventData


class UserUpdatedEvent(BaseModel):
    type: Literal["user.updated"]
    data: UserEventData


class UnrecognizedEvent(BaseModel):
    type: str
    data: Dict[str, Any] = {}


SessionEvent = Union[
    SessionCreatedEvent, SessionEndedEvent, SessionRevokedEvent, SessionRemovedEvent
]

WebhookEvent = Union[
    SessionCreatedEvent,
    SessionEndedEvent,
    SessionRevokedEvent,
    SessionRemovedEvent,
    UserCreatedEvent,
    UserUpdatedEvent,
    UnrecognizedEvent,
]

_EVENT_MODELS = {
    EventType.session_created.value: SessionCreatedEvent,
    EventType.session_ended.value: SessionEndedEvent,
    EventType.session_revoked.value: SessionRevokedEvent,
    EventType.session_removed.value: SessionRemovedEvent,
    EventType.user_created.value: UserCreatedEvent,
    EventType.user_updated.value: UserUpdatedEvent,
}


def parse_webhook_event(payload: Any) -> WebhookEvent:
    """
    Build the event variant for a decoded webhook body.

    Raises:
        ValueError: payload has no string ``type`` or its ``data`` does not
            match the variant (pydantic ValidationError is a ValueError)
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("type"), str):
        raise ValueError("Webhook payload has no event type")

    model = _EVENT_MODELS.get(payload["type"], UnrecognizedEvent)
    return model.model_validate(payload)
