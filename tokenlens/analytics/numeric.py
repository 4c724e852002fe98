"""
Shared numeric helpers for the analytics engine.

Every ratio in the engine goes through safe_divide so a zero
denominator yields 0 rather than NaN or infinity.
"""

from typing import Iterable, Union

Number = Union[int, float]

# Cached input tokens are assumed to cost 10% of the blended rate
CACHE_READ_DISCOUNT = 0.9


def safe_divide(numerator: Number, denominator: Number) -> float:
    """Divide, returning 0.0 when the denominator is zero."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def percentage(part: Number, whole: Number) -> float:
    """part / whole * 100, or 0.0 for an empty whole."""
    return safe_divide(part, whole) * 100


def mean(values: Iterable[Number]) -> float:
    """Arithmetic mean; 0.0 for an empty sequence."""
    values = list(values)
    return safe_divide(sum(values), len(values))
