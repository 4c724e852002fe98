"""
Summary report for TokenLens.

Generates the default view: totals, peak usage, cost efficiency,
cache performance and usage trend.
"""

from tokenlens.models.entities import ComprehensiveStats
from tokenlens.output.formatter import (
    Colors, bold, colorize, format_currency, format_number,
    format_percentage, format_tokens, print_header
)

_PATTERN_COLORS = {
    'increasing': Colors.RED,
    'decreasing': Colors.GREEN,
    'stable': Colors.YELLOW,
}


def generate_summary(stats: ComprehensiveStats, color_enabled: bool = True) -> str:
    """
    Generate the main summary view.

    Args:
        stats: Aggregates for the loaded dataset
        color_enabled: Whether to apply colors
    """
    summary = stats.summary
    lines = []

    lines.append(print_header("TOKEN USAGE ANALYTICS"))
    lines.append("")

    if summary.record_count == 0:
        lines.append("No usage records found.")
        return '\n'.join(lines)

    lines.append(bold("TOTALS", color_enabled))
    lines.append("-" * 40)
    lines.append(f"Period:          {summary.first_day} to {summary.last_day}")
    lines.append(f"Requests:        {format_number(summary.record_count)}")
    lines.append(f"Total Tokens:    {format_tokens(summary.total_tokens)}")
    lines.append(f"Total Cost:      {colorize(format_currency(summary.total_cost), Colors.CYAN, color_enabled)}")
    lines.append(f"Avg Cost/Day:    {format_currency(summary.average_cost_per_day)}")
    lines.append(f"Most Used Model: {summary.most_used_model}")
    lines.append("")

    peak = stats.peak_usage
    lines.append(bold("PEAK USAGE", color_enabled))
    lines.append("-" * 40)
    lines.append(f"Peak Hour:       {peak.peak_hour:02d}:00 ({format_tokens(peak.peak_tokens_per_hour)} tokens)")
    lines.append(f"Peak Day:        {peak.peak_day or 'N/A'} ({format_currency(peak.peak_cost_per_day)})")
    lines.append("")

    efficiency = stats.cost_efficiency
    lines.append(bold("COST EFFICIENCY", color_enabled))
    lines.append("-" * 40)
    lines.append(f"Cost/1K Tokens:  {format_currency(efficiency.cost_per_token * 1000, 4)}")
    lines.append(f"Cost/Request:    {format_currency(efficiency.cost_per_request, 4)}")
    lines.append(f"Cache Savings:   {colorize(format_currency(efficiency.cache_savings), Colors.GREEN, color_enabled)}")
    lines.append("")

    cache = stats.cache_performance
    lines.append(bold("CACHE PERFORMANCE", color_enabled))
    lines.append("-" * 40)
    lines.append(f"Cache Read:      {format_tokens(cache.total_cache_read)}")
    lines.append(f"Input Tokens:    {format_tokens(cache.total_input)}")
    lines.append(f"Hit Ratio:       {format_percentage(cache.cache_hit_ratio)}")
    lines.append("")

    trends = stats.usage_trends
    pattern = trends.usage_pattern.upper()
    pattern_color = _PATTERN_COLORS.get(trends.usage_pattern, Colors.YELLOW)
    percentiles = trends.usage_percentiles
    lines.append(bold("USAGE TREND", color_enabled))
    lines.append("-" * 40)
    lines.append(f"Growth (WoW):    {format_percentage(trends.daily_growth_rate, include_sign=True)}")
    lines.append(f"Pattern:         {colorize(pattern, pattern_color, color_enabled)}")
    lines.append(
        f"Tokens/Request:  p50 {format_tokens(percentiles.median)}"
        f"  p95 {format_tokens(percentiles.p95)}"
        f"  p99 {format_tokens(percentiles.p99)}"
    )

    return '\n'.join(lines)
