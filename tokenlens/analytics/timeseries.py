"""
Time-bucketed series.

Buckets token usage by calendar day or by (day, hour) in the reference
zone, after applying an optional inclusive date-range filter.
"""

from datetime import timezone, tzinfo
from functools import partial
from typing import Dict, Hashable, List, Optional, Sequence

from tokenlens.analytics.grouping import (
    bucket_start,
    day_key,
    group_sums,
    hour_bucket_key,
    hour_key,
    input_tokens,
)
from tokenlens.models.entities import (
    DailyCost,
    DateRange,
    HourlyUsage,
    TimeSeriesPoint,
    UsageRecord,
)
from tokenlens.utils.timestamps import ensure_aware


def filter_by_date_range(
    records: Sequence[UsageRecord],
    date_range: Optional[DateRange],
) -> List[UsageRecord]:
    """Records whose timestamp falls within the range, bounds inclusive."""
    if date_range is None or not date_range.is_bounded:
        return list(records)

    start = ensure_aware(date_range.start) if date_range.start else None
    end = ensure_aware(date_range.end) if date_range.end else None

    filtered = []
    for record in records:
        ts = ensure_aware(record.timestamp)
        if start and ts < start:
            continue
        if end and ts > end:
            continue
        filtered.append(record)
    return filtered


def build_time_series(
    records: Sequence[UsageRecord],
    granularity: str = 'daily',
    date_range: Optional[DateRange] = None,
    tz: tzinfo = timezone.utc,
) -> List[TimeSeriesPoint]:
    """
    Token usage per daily or hourly bucket, oldest first.

    Input tokens are input_with_cache + input_without_cache. Records
    sharing a bucket accumulate into it.
    """
    buckets: Dict[Hashable, TimeSeriesPoint] = {}

    for record in filter_by_date_range(records, date_range):
        if granularity == 'hourly':
            day, hour = hour_bucket_key(record, tz)
            key = (day, hour)
            label = f"{day}T{hour:02d}:00:00"
        else:
            day, hour = day_key(record, tz), 0
            key = day
            label = day

        point = buckets.get(key)
        if point is None:
            point = buckets[key] = TimeSeriesPoint(label=label, start=bucket_start(day, hour, tz))
        point.input_tokens += input_tokens(record)
        point.output_tokens += record.output_tokens
        point.total_tokens += record.total_tokens
        point.cost += record.cost

    return sorted(buckets.values(), key=lambda p: p.start)


def daily_cost_series(
    records: Sequence[UsageRecord],
    tz: tzinfo = timezone.utc,
) -> List[DailyCost]:
    """Total cost per calendar day, oldest first."""
    by_day = group_sums(records, partial(day_key, tz=tz), ['cost'])
    return [DailyCost(date=day, cost=by_day[day]['cost']) for day in sorted(by_day)]


def hourly_usage_profile(
    records: Sequence[UsageRecord],
    tz: tzinfo = timezone.utc,
) -> List[HourlyUsage]:
    """Tokens and cost per hour of day; always 24 entries, hour 0 first."""
    by_hour = group_sums(records, partial(hour_key, tz=tz), ['total_tokens', 'cost'])
    profile = []
    for hour in range(24):
        sums = by_hour.get(hour)
        if sums is None:
            profile.append(HourlyUsage(hour=hour))
        else:
            profile.append(HourlyUsage(hour=hour, tokens=int(sums['total_tokens']), cost=sums['cost']))
    return profile
