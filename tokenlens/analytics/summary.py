"""
Dataset summary and record merging.

The summary gives headline totals for a dataset; merge_records combines
a freshly uploaded batch with an existing one without double counting.
"""

from datetime import timezone, tzinfo
from functools import partial
from typing import List, Sequence

from tokenlens.analytics.grouping import day_key, group_sums, sum_field
from tokenlens.analytics.models import calculate_model_stats
from tokenlens.analytics.numeric import safe_divide
from tokenlens.models.entities import UsageRecord, UsageSummary
from tokenlens.utils.timestamps import ensure_aware


def calculate_summary(
    records: Sequence[UsageRecord],
    tz: tzinfo = timezone.utc,
    model_view: str = 'individual',
) -> UsageSummary:
    """
    Calculate headline totals.

    Average cost per day divides by the number of distinct calendar
    days present, not by the span between first and last day. The
    most used model is the first entry of the request-count ordering.
    """
    if not records:
        return UsageSummary()

    total_cost = sum_field(records, 'cost')
    days = sorted(group_sums(records, partial(day_key, tz=tz), []))
    model_breakdown = calculate_model_stats(records, model_view)

    return UsageSummary(
        total_cost=total_cost,
        total_tokens=int(sum_field(records, 'total_tokens')),
        average_cost_per_day=safe_divide(total_cost, len(days)),
        most_used_model=model_breakdown[0].model if model_breakdown else '',
        first_day=days[0],
        last_day=days[-1],
        record_count=len(records),
        model_breakdown=model_breakdown,
    )


def _record_identity(record: UsageRecord):
    return (ensure_aware(record.timestamp), record.model, record.cost, record.total_tokens)


def merge_records(
    existing: Sequence[UsageRecord],
    new: Sequence[UsageRecord],
) -> List[UsageRecord]:
    """
    Combine two batches into one chronologically sorted list.

    Records sharing timestamp, model, cost and total tokens count as
    the same request; only the first copy is kept. Neither input is
    modified.
    """
    combined = sorted(
        list(existing) + list(new),
        key=_record_identity,
    )

    merged: List[UsageRecord] = []
    for record in combined:
        if merged and _record_identity(merged[-1]) == _record_identity(record):
            continue
        merged.append(record)
    return merged
