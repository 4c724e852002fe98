"""
Analytics package - pure aggregations over usage records.

Main entry point is AnalyticsEngine.comprehensive(); each aggregate is
also available as a standalone function.
"""

from .efficiency import calculate_cache_performance, calculate_cost_efficiency, estimate_cache_savings
from .engine import AnalyticsEngine
from .grouping import group_sums
from .models import calculate_cost_breakdown, calculate_model_stats, compare_models
from .peak import calculate_peak_usage
from .summary import calculate_summary, merge_records
from .timeseries import build_time_series, daily_cost_series, filter_by_date_range, hourly_usage_profile
from .trend import calculate_percentiles, calculate_usage_trends

__all__ = [
    "AnalyticsEngine",
    "build_time_series",
    "calculate_cache_performance",
    "calculate_cost_breakdown",
    "calculate_cost_efficiency",
    "calculate_model_stats",
    "calculate_peak_usage",
    "calculate_percentiles",
    "calculate_summary",
    "calculate_usage_trends",
    "compare_models",
    "daily_cost_series",
    "estimate_cache_savings",
    "filter_by_date_range",
    "group_sums",
    "hourly_usage_profile",
    "merge_records",
]
