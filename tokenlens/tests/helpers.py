"""Shared record builders for analytics tests."""

from datetime import datetime, timezone

from tokenlens.models.entities import UsageRecord


def make_record(ts, model='gpt-4', total_tokens=100, cost=0.01,
                input_with_cache=0, input_without_cache=0, cache_read=0,
                output_tokens=0, kind='Included'):
    """Build a UsageRecord from an ISO-ish timestamp string (UTC)."""
    if isinstance(ts, str):
        ts = datetime.fromisoformat(ts).replace(tzinfo=timezone.utc)
    return UsageRecord(
        timestamp=ts,
        kind=kind,
        model=model,
        input_with_cache=input_with_cache,
        input_without_cache=input_without_cache,
        cache_read=cache_read,
        output_tokens=output_tokens,
        total_tokens=total_tokens,
        cost=cost,
    )
