"""
Auth Event Logger Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class EventType(str, Enum):
    """Identity-provider event types that are recorded as AuthEvents"""

    session_created = "session.created"
    session_ended = "session.ended"
    session_revoked = "session.revoked"
    session_removed = "session.removed"
    user_created = "user.created"
    user_updated = "user.updated"


class ExportType(str, Enum):
    """Spreadsheet column templates"""

    full = "full"
    simple = "simple"
    user_activity = "user-activity"
