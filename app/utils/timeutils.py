from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from app.config import settings


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def today_bounds(now: Optional[datetime] = None, tz_name: Optional[str] = None) -> Tuple[datetime, datetime]:
    """
    Returns [local midnight, local midnight + 24h) for the current day in
    the configured timezone, both expressed in UTC.
    """
    tz = ZoneInfo(tz_name or settings.TIMEZONE)
    local_now = ensure_aware(now or utcnow()).astimezone(tz)
    start = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    end = start + timedelta(days=1)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def days_ago(days: int, now: Optional[datetime] = None) -> datetime:
    return ensure_aware(now or utcnow()) - timedelta(days=days)
