"""
Application Entity

A registered consumer system whose authentication events are tracked.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Relationship, SQLModel

from src.domain.base import utcnow

if TYPE_CHECKING:
    from .auth_event import AuthEvent


class Application(SQLModel, table=True):
    """
    Application entity - one client application whose auth events are tracked.

    Business Rules:
    - Name is globally unique
    - Name doubles as the webhook route segment (/webhook/{name})
    - Cannot be deleted while it still has AuthEvents
    """

    __tablename__ = "applications"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    # Relationships
    auth_events: list["AuthEvent"] = Relationship(back_populates="application")
