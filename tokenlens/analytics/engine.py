"""
AnalyticsEngine facade.

Bundles the stateless aggregation functions behind one object. The
engine holds no per-call state: the active view mode arrives with each
call as a ViewOptions struct, and every aggregate is recomputed from
the records passed in. Records are never modified.
"""

from typing import List, Optional, Sequence

from tokenlens.analytics.efficiency import calculate_cache_performance, calculate_cost_efficiency
from tokenlens.analytics.models import calculate_cost_breakdown, compare_models
from tokenlens.analytics.peak import calculate_peak_usage
from tokenlens.analytics.summary import calculate_summary
from tokenlens.analytics.timeseries import build_time_series, daily_cost_series, hourly_usage_profile
from tokenlens.analytics.trend import calculate_usage_trends
from tokenlens.models.entities import (
    CachePerformance,
    ComprehensiveStats,
    CostEfficiencyStats,
    ModelComparison,
    PeakUsageStats,
    TimeSeriesPoint,
    UsageRecord,
    UsageSummary,
    UsageTrendStats,
    ViewOptions,
)
from tokenlens.utils.timestamps import resolve_timezone


class AnalyticsEngine:
    """Computes usage aggregates for a complete in-memory dataset."""

    def peak_usage(self, records: Sequence[UsageRecord], options: Optional[ViewOptions] = None) -> PeakUsageStats:
        return calculate_peak_usage(records, self._tz(options))

    def cost_efficiency(self, records: Sequence[UsageRecord]) -> CostEfficiencyStats:
        return calculate_cost_efficiency(records)

    def cache_performance(self, records: Sequence[UsageRecord]) -> CachePerformance:
        return calculate_cache_performance(records)

    def usage_trends(self, records: Sequence[UsageRecord], options: Optional[ViewOptions] = None) -> UsageTrendStats:
        return calculate_usage_trends(records, self._tz(options))

    def model_comparison(
        self,
        records: Sequence[UsageRecord],
        options: Optional[ViewOptions] = None,
    ) -> List[ModelComparison]:
        options = options or ViewOptions()
        return compare_models(records, options.model_view)

    def time_series(
        self,
        records: Sequence[UsageRecord],
        options: Optional[ViewOptions] = None,
    ) -> List[TimeSeriesPoint]:
        options = options or ViewOptions()
        return build_time_series(
            records,
            granularity=options.granularity,
            date_range=options.date_range,
            tz=self._tz(options),
        )

    def summary(self, records: Sequence[UsageRecord], options: Optional[ViewOptions] = None) -> UsageSummary:
        options = options or ViewOptions()
        return calculate_summary(records, self._tz(options), options.model_view)

    def comprehensive(
        self,
        records: Sequence[UsageRecord],
        options: Optional[ViewOptions] = None,
    ) -> ComprehensiveStats:
        """
        Compute every aggregate for one dataset and view mode.

        The date range in options narrows only the time series; all
        other aggregates cover the full input.
        """
        options = options or ViewOptions()
        tz = self._tz(options)
        return ComprehensiveStats(
            summary=calculate_summary(records, tz, options.model_view),
            peak_usage=calculate_peak_usage(records, tz),
            cost_efficiency=calculate_cost_efficiency(records),
            usage_trends=calculate_usage_trends(records, tz),
            cache_performance=calculate_cache_performance(records),
            model_comparison=compare_models(records, options.model_view),
            cost_breakdown=calculate_cost_breakdown(records, options.model_view),
            time_series=build_time_series(records, options.granularity, options.date_range, tz),
            daily_costs=daily_cost_series(records, tz),
            hourly_usage=hourly_usage_profile(records, tz),
        )

    @staticmethod
    def _tz(options: Optional[ViewOptions]):
        return resolve_timezone(options.timezone if options else 'UTC')
