"""Models package - input records, view options, and aggregate entities."""

from .entities import (
    AGGREGATED_MODEL_NAME,
    GRANULARITIES,
    MODEL_VIEWS,
    CachePerformance,
    ComprehensiveStats,
    CostBreakdown,
    CostEfficiencyStats,
    DailyCost,
    DateRange,
    HourlyUsage,
    ModelComparison,
    ModelStats,
    PeakUsageStats,
    TimeSeriesPoint,
    UsagePercentiles,
    UsageRecord,
    UsageSummary,
    UsageTrendStats,
    ViewOptions,
)

__all__ = [
    "AGGREGATED_MODEL_NAME",
    "GRANULARITIES",
    "MODEL_VIEWS",
    "CachePerformance",
    "ComprehensiveStats",
    "CostBreakdown",
    "CostEfficiencyStats",
    "DailyCost",
    "DateRange",
    "HourlyUsage",
    "ModelComparison",
    "ModelStats",
    "PeakUsageStats",
    "TimeSeriesPoint",
    "UsagePercentiles",
    "UsageRecord",
    "UsageSummary",
    "UsageTrendStats",
    "ViewOptions",
]
