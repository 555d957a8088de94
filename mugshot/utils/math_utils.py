# File: utils/math_utils.py
"""Math and calculation utilities for Mugshot.

Functions:
    - round_value: Consistent rounding to configured precision
    - clamp: Bound a value to a range
    - calculate_progress: Progress fraction (0.0-1.0) toward a target
    - calculate_percentage: Progress percentage calculations
    - average: Mean of a sequence with empty-input protection
"""

from __future__ import annotations

from collections.abc import Sequence

# ==============================================================================
# Constants (local copies to avoid circular imports)
# ==============================================================================

# Default float precision for display rounding
DATA_FLOAT_PRECISION = 2


def round_value(value: float, precision: int = DATA_FLOAT_PRECISION) -> float:
    """Round a value to the configured precision.

    Examples:
        round_value(4.456) → 4.46
        round_value(4.0) → 4.0
    """
    return round(value, precision)


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between minimum and maximum bounds.

    Examples:
        clamp(1.5, 0.0, 1.0) → 1.0
        clamp(-10, 0, 100) → 0
        clamp(50, 0, 100) → 50
    """
    return max(min_val, min(value, max_val))


def calculate_progress(
    current: int,
    target: int | None,
    is_unlocked: bool,
) -> float:
    """Calculate badge progress as a fraction between 0.0 and 1.0.

    Without a positive target the progress is binary: 1.0 when unlocked,
    otherwise 0.0.

    Args:
        current: Current progress value
        target: Target value, or None for targetless badges
        is_unlocked: Unlock state used when there is no usable target

    Examples:
        calculate_progress(3, 10, False) → 0.3
        calculate_progress(47, 10, True) → 1.0
        calculate_progress(0, None, False) → 0.0
    """
    if target is None or target <= 0:
        return 1.0 if is_unlocked else 0.0
    return clamp(current / target, 0.0, 1.0)


def calculate_percentage(
    current: float,
    target: float,
    precision: int = DATA_FLOAT_PRECISION,
) -> float:
    """Calculate progress percentage with proper rounding.

    Returns:
        Percentage (0-100) with proper rounding, or 0.0 if target is 0

    Examples:
        calculate_percentage(5, 10) → 50.0
        calculate_percentage(1, 3) → 33.33
        calculate_percentage(5, 0) → 0.0  # Division by zero protection
    """
    if target <= 0:
        return 0.0
    return round_value((current / target) * 100, precision)


def average(values: Sequence[float]) -> float:
    """Return the arithmetic mean of values, or 0.0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)
