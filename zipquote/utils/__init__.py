"""Utility modules for ZipQuote."""

from zipquote.utils.numeric_guards import (
    finite_or,
    first_present,
    is_finite,
    money,
    non_negative_or,
    positive_or,
    to_number,
)

__all__ = [
    "finite_or",
    "first_present",
    "is_finite",
    "money",
    "non_negative_or",
    "positive_or",
    "to_number",
]
