"""
User Entity

Denormalized projection of an identity-provider subject.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Relationship, SQLModel

from src.domain.base import utcnow

if TYPE_CHECKING:
    from .auth_event import AuthEvent


class User(SQLModel, table=True):
    """
    User entity - the provider's view of a person, kept in sync by webhooks.

    Business Rules:
    - auth_user_id (provider subject id) is unique
    - Created lazily by the first user.created event that names it
    - Profile fields are overwritten by user.updated events
    - Never deleted by webhook ingestion
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    auth_user_id: str = Field(unique=True, index=True, max_length=255)

    first_name: Optional[str] = Field(default=None, max_length=255)
    last_name: Optional[str] = Field(default=None, max_length=255)
    image: Optional[str] = Field(default=None, max_length=2048)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    # Relationships
    auth_events: list["AuthEvent"] = Relationship(back_populates="user")
