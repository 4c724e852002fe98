"""
Grouping and bucketing utilities.

Reduces a record sequence to per-key sums. Keys are derived from each
record's timestamp after conversion to one reference zone, so an hour
bucket and a day bucket always agree about where a record falls.
"""

from datetime import datetime, tzinfo
from typing import Callable, Dict, Hashable, Iterable, Sequence, Tuple

from tokenlens.models.entities import UsageRecord
from tokenlens.utils.timestamps import to_reference_zone

KeyFn = Callable[[UsageRecord], Hashable]


def input_tokens(record: UsageRecord) -> int:
    """Input tokens with and without cache write."""
    return record.input_with_cache + record.input_without_cache


def day_key(record: UsageRecord, tz: tzinfo) -> str:
    """Calendar day (YYYY-MM-DD) of the record in the reference zone."""
    return to_reference_zone(record.timestamp, tz).strftime('%Y-%m-%d')


def hour_key(record: UsageRecord, tz: tzinfo) -> int:
    """Hour of day (0-23) of the record in the reference zone."""
    return to_reference_zone(record.timestamp, tz).hour


def hour_bucket_key(record: UsageRecord, tz: tzinfo) -> Tuple[str, int]:
    """(day, hour) pair for hourly series buckets."""
    local = to_reference_zone(record.timestamp, tz)
    return local.strftime('%Y-%m-%d'), local.hour


def bucket_start(day: str, hour: int, tz: tzinfo) -> datetime:
    """Chronological instant at which a (day, hour) bucket begins."""
    return datetime.strptime(day, '%Y-%m-%d').replace(hour=hour, tzinfo=tz)


def group_sums(
    records: Iterable[UsageRecord],
    key_fn: KeyFn,
    fields: Sequence[str],
) -> Dict[Hashable, Dict[str, float]]:
    """
    Sum the requested record fields per derived key.

    Args:
        records: Usage records (not modified)
        key_fn: Derives the grouping key from a record
        fields: Record attribute names to accumulate

    Returns:
        Mapping of key -> {field: sum}, in first-seen key order.
        Empty input yields an empty mapping.
    """
    groups: Dict[Hashable, Dict[str, float]] = {}
    for record in records:
        key = key_fn(record)
        sums = groups.get(key)
        if sums is None:
            sums = groups[key] = {name: 0 for name in fields}
        for name in fields:
            sums[name] += getattr(record, name)
    return groups


def sum_field(records: Iterable[UsageRecord], name: str) -> float:
    """Total of one record field across the sequence."""
    return sum(getattr(record, name) for record in records)
