"""
Peak usage analysis.

Finds the busiest hour of day by total tokens and the most expensive
calendar day by cost.
"""

from datetime import timezone, tzinfo
from functools import partial
from typing import Sequence

from tokenlens.analytics.grouping import day_key, group_sums, hour_key
from tokenlens.models.entities import PeakUsageStats, UsageRecord


def calculate_peak_usage(
    records: Sequence[UsageRecord],
    tz: tzinfo = timezone.utc,
) -> PeakUsageStats:
    """
    Calculate peak hour and peak day.

    Tie-break: hours are scanned 0 -> 23 and a later hour must be
    strictly greater to win, so the smaller hour wins a tie. Days are
    scanned in first-seen (input) order under the same strict rule.
    Both scans start from a zero sentinel, so an all-zero dataset
    reports hour 0 and an empty peak day.
    """
    if not records:
        return PeakUsageStats()

    tokens_by_hour = group_sums(records, partial(hour_key, tz=tz), ['total_tokens'])
    cost_by_day = group_sums(records, partial(day_key, tz=tz), ['cost'])

    peak_hour = 0
    peak_tokens = 0
    for hour in range(24):
        tokens = tokens_by_hour.get(hour, {}).get('total_tokens', 0)
        if tokens > peak_tokens:
            peak_hour = hour
            peak_tokens = tokens

    peak_day = ''
    peak_cost = 0.0
    for day, sums in cost_by_day.items():
        if sums['cost'] > peak_cost:
            peak_day = day
            peak_cost = sums['cost']

    return PeakUsageStats(
        peak_hour=peak_hour,
        peak_day=peak_day,
        peak_tokens_per_hour=int(peak_tokens),
        peak_cost_per_day=peak_cost,
    )
