"""
Persistence error mapping

Turns database exceptions into short, human-readable Errors. Details stay in
the logs; callers only ever see the category.
"""

import re

from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError

from libs.result import Error

DATABASE_ERROR = "DATABASE_ERROR"

_SQLITE_UNIQUE = re.compile(r"unique constraint failed: \w+\.(\w+)", re.IGNORECASE)
_POSTGRES_KEY = re.compile(r"key \((\w+)\)=", re.IGNORECASE)


class RecordNotFoundError(LookupError):
    """A row that an operation must connect to does not exist"""

    def __init__(self, entity: str, key: str):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}")


def _constraint_field(message: str) -> str:
    match = _SQLITE_UNIQUE.search(message) or _POSTGRES_KEY.search(message)
    return match.group(1) if match else "field"


def persistence_error(exc: BaseException) -> Error:
    reason = str(exc)

    if isinstance(exc, (RecordNotFoundError, NoResultFound)):
        return Error("RECORD_NOT_FOUND", "Record not found", reason=reason)

    if isinstance(exc, TimeoutError):
        return Error(DATABASE_ERROR, "Database operation timed out", reason=reason)

    if isinstance(exc, IntegrityError):
        message = str(exc.orig).lower()
        if "unique" in message or "duplicate" in message:
            field = _constraint_field(str(exc.orig))
            return Error(
                "ALREADY_EXISTS",
                f"A record with this {field} already exists",
                reason=reason,
            )
        if "foreign key" in message:
            return Error(
                "HAS_RELATED_DATA",
                "Cannot delete this record because it has related data",
                reason=reason,
            )

    if isinstance(exc, SQLAlchemyError):
        return Error(DATABASE_ERROR, "Database operation failed", reason=reason)

    return Error(DATABASE_ERROR, "Database operation failed", reason=type(exc).__name__)
