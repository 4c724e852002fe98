"""
Timestamp utilities for TokenLens.

Handles parsing of export timestamps and conversion into the single
reference timezone used for every hour/day bucket. Export timestamps
are ISO-8601, usually UTC with a 'Z' suffix; naive values are taken
to be UTC.
"""

from datetime import date, datetime, time, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def parse_timestamp(ts: Optional[str]) -> Optional[datetime]:
    """
    Parse an export timestamp to an aware datetime.

    Accepts ISO-8601 with or without offset ('Z' suffix included) and
    the plain 'YYYY-MM-DD HH:MM:SS' form. Naive results are assumed UTC.
    Returns None if parsing fails.

    Args:
        ts: Timestamp string like "2024-01-15T10:30:00.123Z"

    Returns:
        Timezone-aware datetime, or None if parsing failed
    """
    if not ts:
        return None

    ts = ts.strip()
    try:
        # Handle 'Z' suffix (UTC indicator)
        if ts.endswith('Z'):
            ts = ts[:-1] + '+00:00'

        parsed = datetime.fromisoformat(ts)
    except (ValueError, TypeError):
        try:
            parsed = datetime.strptime(ts, '%Y-%m-%d %H:%M:%S')
        except (ValueError, TypeError):
            return None

    return ensure_aware(parsed)


def ensure_aware(dt: datetime) -> datetime:
    """Attach UTC to a naive datetime; aware values pass through."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def resolve_timezone(name: str) -> tzinfo:
    """
    Resolve an IANA zone name to a tzinfo.

    Raises:
        ValueError: if the zone is unknown
    """
    if name.upper() == 'UTC':
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name}") from e


def to_reference_zone(dt: datetime, tz: tzinfo) -> datetime:
    """Convert a timestamp into the reference zone used for bucketing."""
    return ensure_aware(dt).astimezone(tz)


def start_of_day(day: date, tz: tzinfo) -> datetime:
    """First instant of a calendar day in the given zone."""
    return datetime.combine(day, time.min, tzinfo=tz)


def end_of_day(day: date, tz: tzinfo) -> datetime:
    """Last instant of a calendar day in the given zone."""
    return datetime.combine(day, time.max, tzinfo=tz)
