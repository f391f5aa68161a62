from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc_aware(dt: datetime | str | None) -> datetime | None:
    """Ensure a datetime read back from MongoDB is UTC-aware.

    Handles:
    - None values
    - ISO format strings
    - Offset-naive datetimes (assumes UTC, as pymongo returns them)
    - Offset-aware datetimes (converts to UTC)
    """
    if dt is None:
        return None

    if isinstance(dt, str):
        dt = datetime.fromisoformat(dt.replace("Z", "+00:00"))

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)

    return dt
