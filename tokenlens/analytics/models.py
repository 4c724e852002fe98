"""
Per-model aggregation.

In 'individual' view records group by their literal model name; in
'aggregated' view every record falls into one synthetic group. Groups
keep first-seen order so the stable sorts below break ties by the
order in which groups appeared in the input.
"""

from typing import Dict, List, Sequence

from tokenlens.analytics.grouping import group_sums, input_tokens, sum_field
from tokenlens.analytics.numeric import percentage, safe_divide
from tokenlens.models.entities import (
    AGGREGATED_MODEL_NAME,
    CostBreakdown,
    ModelComparison,
    ModelStats,
    UsageRecord,
)


def model_group(record: UsageRecord, model_view: str = 'individual') -> str:
    """Group name for a record under the given model view."""
    if model_view == 'aggregated':
        return AGGREGATED_MODEL_NAME
    return record.model


def record_cache_efficiency(record: UsageRecord) -> float:
    """Cache reads as a percentage of this record's input tokens."""
    return percentage(record.cache_read, input_tokens(record))


def compare_models(
    records: Sequence[UsageRecord],
    model_view: str = 'individual',
) -> List[ModelComparison]:
    """
    Per-request averages for each model group.

    Cache efficiency is the mean of per-record efficiencies, not the
    pooled ratio. Ordered by request count descending; ties keep
    first-seen order.
    """
    groups: Dict[str, ModelComparison] = {}

    for record in records:
        name = model_group(record, model_view)
        stats = groups.get(name)
        if stats is None:
            stats = groups[name] = ModelComparison(model=name)
        stats.total_requests += 1
        stats.avg_cost_per_request += record.cost
        stats.avg_tokens_per_request += record.total_tokens
        stats.cache_efficiency += record_cache_efficiency(record)

    # Convert sums to averages
    for stats in groups.values():
        stats.avg_cost_per_request = safe_divide(stats.avg_cost_per_request, stats.total_requests)
        stats.avg_tokens_per_request = safe_divide(stats.avg_tokens_per_request, stats.total_requests)
        stats.cache_efficiency = safe_divide(stats.cache_efficiency, stats.total_requests)

    return sorted(groups.values(), key=lambda s: s.total_requests, reverse=True)


def calculate_model_stats(
    records: Sequence[UsageRecord],
    model_view: str = 'individual',
) -> List[ModelStats]:
    """
    Pooled totals for each model group.

    Cache efficiency here is pooled over the group and counts cache
    reads in the denominator: cache_read / (input + cache_read). Ordered
    by request count descending.
    """
    groups = group_sums(
        records,
        lambda r: model_group(r, model_view),
        ['total_tokens', 'cost', 'cache_read', 'input_with_cache', 'input_without_cache'],
    )
    counts: Dict[str, int] = {}
    for record in records:
        name = model_group(record, model_view)
        counts[name] = counts.get(name, 0) + 1

    stats = []
    for name, sums in groups.items():
        total_input = sums['input_with_cache'] + sums['input_without_cache']
        stats.append(ModelStats(
            model=name,
            total_requests=counts[name],
            total_tokens=int(sums['total_tokens']),
            total_cost=sums['cost'],
            average_tokens_per_request=safe_divide(sums['total_tokens'], counts[name]),
            cache_efficiency=percentage(sums['cache_read'], total_input + sums['cache_read']),
        ))

    return sorted(stats, key=lambda s: s.total_requests, reverse=True)


def calculate_cost_breakdown(
    records: Sequence[UsageRecord],
    model_view: str = 'individual',
) -> List[CostBreakdown]:
    """Cost and share of total cost per model group, most expensive first."""
    total_cost = sum_field(records, 'cost')
    groups = group_sums(records, lambda r: model_group(r, model_view), ['cost'])

    breakdown = [
        CostBreakdown(
            model=name,
            cost=sums['cost'],
            percentage=percentage(sums['cost'], total_cost),
        )
        for name, sums in groups.items()
    ]
    return sorted(breakdown, key=lambda b: b.cost, reverse=True)
