"""
Output formatting for TokenLens.

Handles ASCII tables, colors, and CLI output formatting.
"""

import os
import re
import sys
from typing import Any, List, Optional, Union

# Enable ANSI colors on Windows
if sys.platform == 'win32':
    os.system('')  # Triggers VT100 emulation

_ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')


class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = '\033[0m'
    BOLD = '\033[1m'

    RED = '\033[91m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    CYAN = '\033[96m'
    GRAY = '\033[90m'


def colorize(text: str, color: str, enabled: bool = True) -> str:
    """Apply color if enabled."""
    if not enabled:
        return text
    return f"{color}{text}{Colors.RESET}"


def bold(text: str, enabled: bool = True) -> str:
    """Make text bold."""
    if not enabled:
        return text
    return f"{Colors.BOLD}{text}{Colors.RESET}"


def format_currency(value: float, precision: int = 2) -> str:
    """Format as currency, 2 decimal places unless asked otherwise."""
    return f"${value:,.{precision}f}"


def format_number(value: Union[int, float], decimals: int = 0) -> str:
    """Format number with thousands separator."""
    if decimals > 0:
        return f"{value:,.{decimals}f}"
    return f"{int(value):,}"


def format_percentage(value: float, precision: int = 1, include_sign: bool = False) -> str:
    """Format as percentage."""
    if include_sign and value > 0:
        return f"+{value:.{precision}f}%"
    return f"{value:.{precision}f}%"


def format_tokens(value: int) -> str:
    """Format token count with K/M suffix for large numbers."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    elif value >= 1_000:
        return f"{value / 1_000:.1f}K"
    return str(int(value))


def create_bar(value: float, max_value: float, width: int = 20) -> str:
    """Create ASCII progress bar."""
    if max_value == 0:
        return ' ' * width

    ratio = min(1.0, value / max_value)
    filled = int(ratio * width)

    return '█' * filled + '░' * (width - filled)


def strip_ansi(text: str) -> str:
    """Remove ANSI escape codes from text."""
    return _ANSI_ESCAPE.sub('', text)


_COLUMN_SEP = ' │ '
_MIN_LABEL_WIDTH = 8


def _visible_len(text: str) -> int:
    return len(strip_ansi(text))


def _pad(text: str, width: int, align: str) -> str:
    gap = ' ' * (width - _visible_len(text))
    return gap + text if align == 'r' else text + gap


def _truncate(text: str, width: int) -> str:
    plain = strip_ansi(text)
    if len(plain) <= width:
        return text
    return plain[:width - 1] + '…'


def format_table(
    headers: List[str],
    rows: List[List[Any]],
    alignments: Optional[List[str]] = None,
    color_enabled: bool = True,
    max_width: Optional[int] = None,
) -> str:
    """
    Render rows as a box-drawn text table.

    Column widths are measured without ANSI codes. When max_width is
    given and the table is wider, the first (label) column is cut
    down, never below 8 characters, and its long cells end in '…'.

    Args:
        headers: Column headers
        rows: One list of cells per row
        alignments: 'l' or 'r' per column (default all left)
        color_enabled: Whether the header row is bold
        max_width: Widest line allowed, or None for no limit
    """
    if not rows:
        return "No data to display."

    cells = [[str(value) for value in row] for row in rows]
    aligns = alignments or ['l'] * len(headers)
    widths = [
        max([len(header)] + [_visible_len(row[col]) for row in cells])
        for col, header in enumerate(headers)
    ]

    if max_width is not None:
        overflow = sum(widths) + len(_COLUMN_SEP) * (len(widths) - 1) - max_width
        if overflow > 0:
            widths[0] = max(_MIN_LABEL_WIDTH, widths[0] - overflow)
            headers = [_truncate(headers[0], widths[0])] + list(headers[1:])
            cells = [[_truncate(row[0], widths[0])] + row[1:] for row in cells]

    def render(row: List[str]) -> str:
        return _COLUMN_SEP.join(_pad(text, widths[col], aligns[col]) for col, text in enumerate(row))

    lines = [bold(render(headers), color_enabled), '─┼─'.join('─' * w for w in widths)]
    lines.extend(render(row) for row in cells)
    return '\n'.join(lines)


def print_header(text: str, char: str = '=') -> str:
    """Create a header line."""
    line = char * 60
    return f"{line}\n  {text}\n{line}"
