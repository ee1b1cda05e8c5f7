"""
Application Use Cases

Management of the applications whose events are tracked.
"""

from .create_application_use_case import CreateApplicationUseCase
from .delete_application_use_case import DeleteApplicationUseCase
from .dtos import (
    ApplicationListResponse,
    ApplicationOption,
    ApplicationOptionsResponse,
    ApplicationResponse,
    CreateApplicationCommand,
    DeleteApplicationResponse,
    UpdateApplicationCommand,
)
from .get_application_use_case import GetApplicationUseCase
from .list_applications_use_case import ListApplicationOptionsUseCase, ListApplicationsUseCase
from .update_application_use_case import UpdateApplicationUseCase

__all__ = [
    "CreateApplicationUseCase",
    "ListApplicationsUseCase",
    "ListApplicationOptionsUseCase",
    "GetApplicationUseCase",
    "UpdateApplicationUseCase",
    "DeleteApplicationUseCase",
    "CreateApplicationCommand",
    "UpdateApplicationCommand",
    "ApplicationResponse",
    "ApplicationListResponse",
    "ApplicationOption",
    "ApplicationOptionsResponse",
    "DeleteApplicationResponse",
]
