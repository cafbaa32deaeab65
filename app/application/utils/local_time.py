from __future__ import annotations

import re
from datetime import datetime, time
from zoneinfo import ZoneInfo

from app.domain.entities.pricing_rules import END_OF_DAY

# "+10:00" arrives as " 10:00" when a query string is not url-encoded
_SPACE_OFFSET = re.compile(r"^(.+[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?) (\d{2}:?\d{2})$")
_END_OF_DAY = re.compile(r"^24:00(?::00(?:\.0+)?)?$")


def parse_timestamp(value: str, timezone: ZoneInfo) -> datetime:
    """Parse an ISO-8601 timestamp into local time. Naive values are taken as local already."""
    text = value.strip()
    text = _SPACE_OFFSET.sub(r"\1+\2", text)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone)
    return parsed.astimezone(timezone)


def day_of_week(moment: datetime) -> int:
    """0 = Sunday .. 6 = Saturday."""
    return (moment.weekday() + 1) % 7


def time_of_day(moment: datetime) -> str:
    return moment.strftime("%H:%M")


def parse_time_of_day(value: str | time) -> time:
    """Parse a database time ("HH:MM" or "HH:MM:SS") to minute precision. "24:00" is END_OF_DAY."""
    if isinstance(value, time):
        if value == END_OF_DAY:
            return value
        return value.replace(second=0, microsecond=0)
    text = value.strip()
    if _END_OF_DAY.match(text):
        return END_OF_DAY
    parsed = time.fromisoformat(text)
    return parsed.replace(second=0, microsecond=0, tzinfo=None)


def safe_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except Exception:
        return ZoneInfo("UTC")
