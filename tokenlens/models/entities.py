"""
Data structures (entities) for TokenLens.

Uses dataclasses for clean, typed data structures.
UsageRecord is the only input type; everything else is a derived
aggregate computed fresh per call and returned as plain data.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from tokenlens.utils.timestamps import resolve_timezone


MODEL_VIEWS = ('individual', 'aggregated')
GRANULARITIES = ('daily', 'hourly')
AGGREGATED_MODEL_NAME = 'All Models'


@dataclass(frozen=True)
class UsageRecord:
    """A single API request from a usage export."""
    timestamp: datetime
    kind: str
    model: str
    max_mode: bool = False
    input_with_cache: int = 0
    input_without_cache: int = 0
    cache_read: int = 0
    output_tokens: int = 0
    # Supplied by the export; not reconciled against the other counts
    total_tokens: int = 0
    cost: float = 0.0


@dataclass
class DateRange:
    """Inclusive instant range. A missing bound is unbounded on that side."""
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def __post_init__(self):
        if self.start and self.end and self.start > self.end:
            raise ValueError("date range start must not be after end")

    @property
    def is_bounded(self) -> bool:
        return self.start is not None or self.end is not None


@dataclass
class ViewOptions:
    """
    View-mode configuration threaded into each aggregation call.

    The engine keeps no view state of its own; callers hold on to
    this struct between calls.
    """
    model_view: str = 'individual'
    granularity: str = 'daily'
    date_range: DateRange = field(default_factory=DateRange)
    timezone: str = 'UTC'

    def __post_init__(self):
        if self.model_view not in MODEL_VIEWS:
            raise ValueError(
                f"model_view must be one of {MODEL_VIEWS}, got {self.model_view!r}"
            )
        if self.granularity not in GRANULARITIES:
            raise ValueError(
                f"granularity must be one of {GRANULARITIES}, got {self.granularity!r}"
            )
        # Raises ValueError for an unknown zone
        resolve_timezone(self.timezone)


@dataclass
class PeakUsageStats:
    """Busiest hour of day by tokens and busiest day by cost."""
    peak_hour: int = 0
    peak_day: str = ''
    peak_tokens_per_hour: int = 0
    peak_cost_per_day: float = 0.0


@dataclass
class CostEfficiencyStats:
    cost_per_token: float = 0.0
    cost_per_request: float = 0.0
    cache_savings: float = 0.0


@dataclass
class UsagePercentiles:
    median: int = 0
    p95: int = 0
    p99: int = 0


@dataclass
class UsageTrendStats:
    """Week-over-week growth, its classification, and token percentiles."""
    daily_growth_rate: float = 0.0
    usage_pattern: str = 'stable'
    usage_percentiles: UsagePercentiles = field(default_factory=UsagePercentiles)


@dataclass
class CachePerformance:
    total_cache_read: int = 0
    total_input: int = 0
    cache_hit_ratio: float = 0.0
    estimated_savings: float = 0.0


@dataclass
class ModelComparison:
    """Per-request averages for one model group."""
    model: str
    avg_cost_per_request: float = 0.0
    avg_tokens_per_request: float = 0.0
    cache_efficiency: float = 0.0
    total_requests: int = 0


@dataclass
class ModelStats:
    """Pooled totals for one model group."""
    model: str
    total_requests: int = 0
    total_tokens: int = 0
    total_cost: float = 0.0
    average_tokens_per_request: float = 0.0
    cache_efficiency: float = 0.0


@dataclass
class CostBreakdown:
    model: str
    cost: float = 0.0
    percentage: float = 0.0


@dataclass
class TimeSeriesPoint:
    """One daily or hourly bucket of token usage."""
    label: str
    start: datetime
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0
    cost: float = 0.0


@dataclass
class DailyCost:
    date: str
    cost: float = 0.0


@dataclass
class HourlyUsage:
    hour: int
    tokens: int = 0
    cost: float = 0.0


@dataclass
class UsageSummary:
    """Headline totals for a dataset."""
    total_cost: float = 0.0
    total_tokens: int = 0
    average_cost_per_day: float = 0.0
    most_used_model: str = ''
    first_day: str = ''
    last_day: str = ''
    record_count: int = 0
    model_breakdown: List[ModelStats] = field(default_factory=list)


@dataclass
class ComprehensiveStats:
    """Every aggregate for one dataset and view mode."""
    summary: UsageSummary
    peak_usage: PeakUsageStats
    cost_efficiency: CostEfficiencyStats
    usage_trends: UsageTrendStats
    cache_performance: CachePerformance
    model_comparison: List[ModelComparison]
    cost_breakdown: List[CostBreakdown]
    time_series: List[TimeSeriesPoint]
    daily_costs: List[DailyCost]
    hourly_usage: List[HourlyUsage]
