"""
Cost efficiency and cache performance metrics.

Both aggregates estimate cache savings through estimate_cache_savings()
so they agree exactly for the same input. The estimate assumes one
blended per-token price across the whole dataset; it is a heuristic,
not an accounting figure.
"""

from typing import Sequence

from tokenlens.analytics.grouping import input_tokens, sum_field
from tokenlens.analytics.numeric import CACHE_READ_DISCOUNT, percentage, safe_divide
from tokenlens.models.entities import CachePerformance, CostEfficiencyStats, UsageRecord


def estimate_cache_savings(
    total_cache_read: int,
    total_cost: float,
    total_tokens: int,
) -> float:
    """
    Estimated money saved by cache reads.

    savings = cache_read * (total_cost / total_tokens) * 0.9
    """
    return total_cache_read * safe_divide(total_cost, total_tokens) * CACHE_READ_DISCOUNT


def calculate_cost_efficiency(records: Sequence[UsageRecord]) -> CostEfficiencyStats:
    """Cost per token, cost per request and estimated cache savings."""
    if not records:
        return CostEfficiencyStats()

    total_cost = sum_field(records, 'cost')
    total_tokens = sum_field(records, 'total_tokens')
    total_cache_read = sum_field(records, 'cache_read')

    return CostEfficiencyStats(
        cost_per_token=safe_divide(total_cost, total_tokens),
        cost_per_request=safe_divide(total_cost, len(records)),
        cache_savings=estimate_cache_savings(total_cache_read, total_cost, total_tokens),
    )


def calculate_cache_performance(records: Sequence[UsageRecord]) -> CachePerformance:
    """Cache-read totals, hit ratio against input tokens, and savings."""
    if not records:
        return CachePerformance()

    total_cache_read = sum_field(records, 'cache_read')
    total_input = sum(input_tokens(r) for r in records)
    total_cost = sum_field(records, 'cost')
    total_tokens = sum_field(records, 'total_tokens')

    return CachePerformance(
        total_cache_read=int(total_cache_read),
        total_input=int(total_input),
        cache_hit_ratio=percentage(total_cache_read, total_input),
        estimated_savings=estimate_cache_savings(total_cache_read, total_cost, total_tokens),
    )
