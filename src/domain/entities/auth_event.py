"""
AuthEvent Entity

Immutable log of authentication events received from the identity provider.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from src.domain.base import utcnow

if TYPE_CHECKING:
    from .application import Application
    from .user import User


class AuthEvent(SQLModel, table=True):
    """
    AuthEvent entity - one authentication-related occurrence.

    Business Rules:
    - Immutable (never updated by ingestion)
    - Written only by webhook ingestion
    - Deleted only through the explicit bulk delete operation
    - Always linked to exactly one Application and one User
    """

    __tablename__ = "auth_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    event_type: str = Field(max_length=100)  # EventType value
    application_id: UUID = Field(foreign_key="applications.id")
    user_id: UUID = Field(foreign_key="users.id")

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    # Relationships
    application: Optional["Application"] = Relationship(back_populates="auth_events")
    user: Optional["User"] = Relationship(back_populates="auth_events")

    __table_args__ = (
        Index("idx_auth_event_created_at", "created_at"),
        Index("idx_auth_event_app_type", "application_id", "event_type"),
        Index("idx_auth_event_user_id", "user_id"),
    )
