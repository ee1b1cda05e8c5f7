"""
Auth Event Logger Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import EventType, ExportType

# Export all entities
from .application import Application
from .user import User
from .auth_event import AuthEvent

__all__ = [
    # Enums
    "EventType",
    "ExportType",
    # Entities
    "Application",
    "User",
    "AuthEvent",
]
