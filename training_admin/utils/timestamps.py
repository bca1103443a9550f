"""UTC timestamp helpers shared by entities and the state document."""

from datetime import UTC, datetime, timedelta


def utc_now(offset_hours: float = 0) -> datetime:
    """Current UTC time, optionally shifted by a number of hours."""
    return datetime.now(UTC) + timedelta(hours=offset_hours)


def ensure_utc_aware(dt: datetime | None) -> datetime | None:
    """Ensure datetime is UTC-aware (naive values are assumed to be UTC)."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def parse_datetime(value: str | datetime | None) -> datetime | None:
    """Parse an ISO-8601 timestamp from the state document."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_utc_aware(value)
    return ensure_utc_aware(datetime.fromisoformat(value.replace("Z", "+00:00")))


def format_datetime(value: datetime | None) -> str | None:
    """Serialize a timestamp for the state document."""
    if value is None:
        return None
    return ensure_utc_aware(value).isoformat()
