from datetime import UTC, datetime


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every entity stores."""
    return datetime.now(UTC).replace(tzinfo=None)
