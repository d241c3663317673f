"""Numeric helpers shared by the calculators.

Every division that can see a zero denominator goes through safe_divide so a
degenerate input yields a defined fallback instead of NaN or ZeroDivisionError.
"""


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning ``default`` when the denominator is zero.

    Args:
        numerator: Dividend
        denominator: Divisor
        default: Value returned when denominator == 0

    Returns:
        numerator / denominator, or default
    """
    if denominator == 0:
        return default
    return numerator / denominator


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into the closed interval [low, high]."""
    return max(low, min(high, value))
