"""
Decimal Helpers Module

Conversion and formatting helpers for monetary amounts and rates.
NEVER uses float for monetary values: floats are converted through their
string form so 0.0001 becomes Decimal('0.0001') exactly.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from typing import Union
import re

# Set global decimal context for financial precision
getcontext().prec = 28

Number = Union[Decimal, int, float, str]

ZERO = Decimal('0')


def to_decimal(value: Number) -> Decimal:
    """
    Convert a number to Decimal without binary float artifacts

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert {value!r} to Decimal")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, str):
        result = decimal_from_string(value)
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    else:
        raise ValueError(f"Cannot convert {value!r} to Decimal")

    if not result.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return result


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert string to Decimal, handling common formats

    Args:
        value: String representation of number

    Returns:
        Decimal value

    Raises:
        ValueError: If string cannot be converted to valid Decimal
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")

    # Remove currency symbols, whitespace and thousands separators
    clean_value = re.sub(r'[^\d.\-+eE]', '', value.strip())

    try:
        return Decimal(clean_value)
    except InvalidOperation:
        raise ValueError(f"Cannot convert '{value}' to Decimal")


def round_amount(value: Decimal, places: int = 2) -> Decimal:
    """Round to a fixed number of decimal places (half-up)"""
    return value.quantize(Decimal('0.1') ** places, rounding=ROUND_HALF_UP)


def format_amount(value: Decimal, places: int = 2) -> str:
    """Format for display with thousands separators"""
    return f"{round_amount(value, places):,.{places}f}"
