"""
Application Use Case DTOs (Data Transfer Objects)

All Command and Response classes for application management.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import Application


class CreateApplicationCommand(BaseModel):
    name: str
    description: Optional[str] = None


class UpdateApplicationCommand(BaseModel):
    application_id: UUID
    name: str
    description: Optional[str] = None


class ApplicationResponse(BaseModel):
    """Application as shown on the management screen"""

    id: str
    name: str
    description: Optional[str]
    created_at: str
    updated_at: str
    event_count: int = 0

    @classmethod
    def from_entity(cls, application: Application, event_count: int = 0) -> "ApplicationResponse":
        return cls(
            id=str(application.id),
            name=application.name,
            description=application.description,
            created_at=application.created_at.isoformat() + "Z",
            updated_at=application.updated_at.isoformat() + "Z",
            event_count=event_count,
        )


class ApplicationListResponse(BaseModel):
    applications: List[ApplicationResponse]


class ApplicationOption(BaseModel):
    """Application entry for filter dropdowns"""

    id: str
    name: str


class ApplicationOptionsResponse(BaseModel):
    applications: List[ApplicationOption]


class DeleteApplicationResponse(BaseModel):
    status: str
