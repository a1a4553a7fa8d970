"""Numeric guards for partially specified pricebook values.

Pricebook documents are edited by hand and imported from spreadsheets, so any
numeric field may be missing, null, a numeric string, NaN or garbage. These
helpers turn such values into finite floats before they reach money math.
"""

import math
from typing import Any, Optional


def to_number(value: Any) -> Optional[float]:
    """Coerce a number-like value to float.

    Args:
        value: int, float, numeric string (whitespace allowed) or anything else

    Returns:
        The float value (possibly NaN/inf), or None when the value is not
        number-like at all.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return float(text)
        except ValueError:
            return None
    return None


def is_finite(value: Any) -> bool:
    """Check that value is a real, finite number."""
    number = to_number(value)
    return number is not None and math.isfinite(number)


def finite_or(value: Any, neutral: float = 0.0) -> float:
    """Return value when finite (any sign), otherwise the neutral amount."""
    number = to_number(value)
    if number is None or not math.isfinite(number):
        return neutral
    return number


def positive_or(value: Any, neutral: float = 1.0) -> float:
    """Return value when finite and > 0, otherwise the neutral multiplier."""
    number = to_number(value)
    if number is None or not math.isfinite(number) or number <= 0:
        return neutral
    return number


def non_negative_or(value: Any, neutral: float = 0.0) -> float:
    """Return value when finite and >= 0, otherwise the neutral amount."""
    number = to_number(value)
    if number is None or not math.isfinite(number) or number < 0:
        return neutral
    return number


def first_present(*values: Any) -> Any:
    """Return the first value that is not None (None when all are)."""
    for value in values:
        if value is not None:
            return value
    return None


def money(amount: float) -> float:
    """Round a monetary amount to cents."""
    return round(amount, 2)
