# summarizer_api/utils/timefmt.py
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC "now", the form every DateTime column is stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def to_iso_z(dt: datetime | None) -> str | None:
    """2025-03-01T00:00:00.000Z (naive values are taken as UTC)."""
    if dt is None:
        return None
    dt = to_naive_utc(dt)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"
