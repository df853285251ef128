# fastfood/utils/clock.py
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

UTC = ZoneInfo("UTC")


def utcnow() -> datetime:
    """Current UTC time, naive, for DB storage."""
    return datetime.now(UTC).replace(tzinfo=None)


def minutes_from(start: datetime, minutes: int) -> datetime:
    return start + timedelta(minutes=minutes)
