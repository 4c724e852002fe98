"""Pydantic models for the statistics and upload APIs."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class ModelStatsModel(BaseModel):
    model: str
    total_requests: int
    total_tokens: int
    total_cost: float
    average_tokens_per_request: float
    cache_efficiency: float


class UsageSummaryModel(BaseModel):
    model_config = {"protected_namespaces": ()}

    total_cost: float
    total_tokens: int
    average_cost_per_day: float
    most_used_model: str
    first_day: str
    last_day: str
    record_count: int
    model_breakdown: List[ModelStatsModel]


class PeakUsageModel(BaseModel):
    peak_hour: int
    peak_day: str
    peak_tokens_per_hour: int
    peak_cost_per_day: float


class CostEfficiencyModel(BaseModel):
    cost_per_token: float
    cost_per_request: float
    cache_savings: float


class UsagePercentilesModel(BaseModel):
    median: int
    p95: int
    p99: int


class UsageTrendModel(BaseModel):
    daily_growth_rate: float
    usage_pattern: str
    usage_percentiles: UsagePercentilesModel


class CachePerformanceModel(BaseModel):
    total_cache_read: int
    total_input: int
    cache_hit_ratio: float
    estimated_savings: float


class ModelComparisonModel(BaseModel):
    model: str
    avg_cost_per_request: float
    avg_tokens_per_request: float
    cache_efficiency: float
    total_requests: int


class CostBreakdownModel(BaseModel):
    model: str
    cost: float
    percentage: float


class TimeSeriesPointModel(BaseModel):
    label: str
    start: datetime
    input_tokens: int
    output_tokens: int
    total_tokens: int
    cost: float


class DailyCostModel(BaseModel):
    date: str
    cost: float


class HourlyUsageModel(BaseModel):
    hour: int
    tokens: int
    cost: float


class ComprehensiveStatsModel(BaseModel):
    model_config = {"protected_namespaces": ()}

    summary: UsageSummaryModel
    peak_usage: PeakUsageModel
    cost_efficiency: CostEfficiencyModel
    usage_trends: UsageTrendModel
    cache_performance: CachePerformanceModel
    model_comparison: List[ModelComparisonModel]
    cost_breakdown: List[CostBreakdownModel]
    time_series: List[TimeSeriesPointModel]
    daily_costs: List[DailyCostModel]
    hourly_usage: List[HourlyUsageModel]


class ViewOptionsModel(BaseModel):
    model_config = {"protected_namespaces": ()}

    model_view: str
    granularity: str
    timezone: str
    date_from: Optional[str] = None
    date_to: Optional[str] = None


class ComprehensiveStatsResponse(BaseModel):
    success: bool = True
    message: str
    record_count: int
    options: ViewOptionsModel
    data: Optional[ComprehensiveStatsModel] = None


class UploadResponse(BaseModel):
    success: bool = True
    message: str
    new_records: int
    total_records: int
    summary: UsageSummaryModel
