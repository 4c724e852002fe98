"""
Model comparison report for TokenLens.

Generates the --models view with per-model averages and cost share.
"""

from typing import Optional

from tokenlens.models.entities import ComprehensiveStats
from tokenlens.output.formatter import (
    Colors, bold, colorize, create_bar, format_currency, format_number,
    format_percentage, format_table, format_tokens
)


def _cache_color(rate: float) -> str:
    if rate > 50:
        return Colors.GREEN
    if rate > 20:
        return Colors.YELLOW
    return Colors.RED


def generate_models(
    stats: ComprehensiveStats,
    color_enabled: bool = True,
    max_width: Optional[int] = None,
) -> str:
    """
    Generate model comparison report.

    Args:
        stats: Aggregates for the loaded dataset
        color_enabled: Whether to apply colors
        max_width: Widest table line, from display.table_max_width
    """
    lines = []
    lines.append(bold("MODEL COMPARISON", color_enabled))
    lines.append("")

    if not stats.model_comparison:
        return lines[0] + "\n\nNo model data found."

    headers = ['Model', 'Requests', 'Avg Cost/Req', 'Avg Tokens/Req', 'Cache Eff.']
    alignments = ['l', 'r', 'r', 'r', 'r']
    table_rows = []
    for m in stats.model_comparison:
        table_rows.append([
            m.model,
            format_number(m.total_requests),
            format_currency(m.avg_cost_per_request, 4),
            format_tokens(int(m.avg_tokens_per_request)),
            colorize(format_percentage(m.cache_efficiency), _cache_color(m.cache_efficiency), color_enabled),
        ])
    lines.append(format_table(headers, table_rows, alignments, color_enabled, max_width))

    lines.append("")
    lines.append(bold("COST BREAKDOWN", color_enabled))
    lines.append("-" * 40)
    max_cost = max((b.cost for b in stats.cost_breakdown), default=0)
    for b in stats.cost_breakdown:
        bar = create_bar(b.cost, max_cost, width=20)
        lines.append(f"  {b.model:30} {format_currency(b.cost):>10} {format_percentage(b.percentage):>7}  {bar}")

    return '\n'.join(lines)
