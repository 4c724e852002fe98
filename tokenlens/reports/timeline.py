"""
Timeline report for TokenLens.

Generates the --timeline view: bucketed token usage and the
hour-of-day activity profile.
"""

from typing import Optional

from tokenlens.models.entities import ComprehensiveStats
from tokenlens.output.formatter import (
    bold, create_bar, format_currency, format_table, format_tokens
)


def generate_timeline(
    stats: ComprehensiveStats,
    color_enabled: bool = True,
    max_width: Optional[int] = None,
) -> str:
    """
    Generate token usage timeline and hourly profile.

    Args:
        stats: Aggregates for the loaded dataset
        color_enabled: Whether to apply colors
        max_width: Widest table line, from display.table_max_width
    """
    lines = []
    lines.append(bold("TOKEN USAGE OVER TIME", color_enabled))
    lines.append("")

    if not stats.time_series:
        lines.append("No usage in the selected range.")
    else:
        headers = ['Bucket', 'Input', 'Output', 'Total', 'Cost']
        alignments = ['l', 'r', 'r', 'r', 'r']
        table_rows = [
            [
                p.label,
                format_tokens(p.input_tokens),
                format_tokens(p.output_tokens),
                format_tokens(p.total_tokens),
                format_currency(p.cost),
            ]
            for p in stats.time_series
        ]
        lines.append(format_table(headers, table_rows, alignments, color_enabled, max_width))

    lines.append("")
    lines.append(bold("ACTIVITY BY HOUR", color_enabled))
    lines.append("-" * 60)

    max_tokens = max((h.tokens for h in stats.hourly_usage), default=0)
    for h in stats.hourly_usage:
        bar = create_bar(h.tokens, max_tokens, width=30)
        lines.append(f"{h.hour:02d}:00 {format_tokens(h.tokens):>8} {format_currency(h.cost):>10} {bar}")

    return '\n'.join(lines)
