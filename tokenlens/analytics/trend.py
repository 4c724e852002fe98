"""
Trend analysis.

Growth compares the mean daily token total of the first week of data
against the last week. Percentiles use nearest-rank indexing with no
interpolation. Both are deliberately simple so results reproduce
exactly across runs; neither should be swapped for a "better"
statistical method.
"""

import math
from datetime import timezone, tzinfo
from functools import partial
from typing import List, Sequence

from tokenlens.analytics.grouping import day_key, group_sums
from tokenlens.analytics.numeric import mean, safe_divide
from tokenlens.models.entities import UsagePercentiles, UsageRecord, UsageTrendStats

GROWTH_WINDOW_DAYS = 7
GROWTH_THRESHOLD_PCT = 10.0


def calculate_growth_rate(daily_totals: Sequence[float]) -> float:
    """
    Percentage change between the first and last window of days.

    Each window holds min(7, N) days, so with fewer than 14 days the
    windows overlap (and with N <= 7 they are identical, giving 0).
    Returns 0 for fewer than 2 days or a zero first-window mean.

    Args:
        daily_totals: Per-day totals in chronological order
    """
    n = len(daily_totals)
    if n < 2:
        return 0.0

    window = min(GROWTH_WINDOW_DAYS, n)
    first_mean = mean(daily_totals[:window])
    last_mean = mean(daily_totals[-window:])
    return safe_divide(last_mean - first_mean, first_mean) * 100


def classify_growth(growth_rate: float) -> str:
    """Map a growth rate onto increasing / decreasing / stable."""
    if growth_rate > GROWTH_THRESHOLD_PCT:
        return 'increasing'
    if growth_rate < -GROWTH_THRESHOLD_PCT:
        return 'decreasing'
    return 'stable'


def percentile(sorted_values: Sequence[int], p: float) -> int:
    """Element at floor(N * p) of an ascending sequence; 0 when out of range."""
    index = math.floor(len(sorted_values) * p)
    if index >= len(sorted_values):
        return 0
    return sorted_values[index]


def calculate_percentiles(values: Sequence[int]) -> UsagePercentiles:
    """p50 / p95 / p99 of per-record token counts."""
    ordered: List[int] = sorted(values)
    return UsagePercentiles(
        median=percentile(ordered, 0.50),
        p95=percentile(ordered, 0.95),
        p99=percentile(ordered, 0.99),
    )


def calculate_usage_trends(
    records: Sequence[UsageRecord],
    tz: tzinfo = timezone.utc,
) -> UsageTrendStats:
    """Growth rate, usage pattern and token percentiles."""
    if not records:
        return UsageTrendStats()

    daily = group_sums(records, partial(day_key, tz=tz), ['total_tokens'])
    # ISO date keys sort chronologically
    daily_totals = [daily[day]['total_tokens'] for day in sorted(daily)]

    growth_rate = calculate_growth_rate(daily_totals)

    return UsageTrendStats(
        daily_growth_rate=growth_rate,
        usage_pattern=classify_growth(growth_rate),
        usage_percentiles=calculate_percentiles([r.total_tokens for r in records]),
    )
