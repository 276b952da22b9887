"""
Money Utilities - Safe Decimal operations for prices.

Avoids float precision issues by using Decimal throughout.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal]

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")


def to_decimal(value: Union[Number, None]) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        if isinstance(value, float):
            # Go through str to keep the printed precision
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def parse_money(value: Number) -> Decimal:
    """
    Strict conversion for prices read from outside the process.

    Unlike to_decimal, invalid input raises instead of becoming zero.

    Raises:
        ValueError: value is None, a bool, unparseable, or not finite
    """
    if value is None or isinstance(value, bool):
        raise ValueError(f"invalid price: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"invalid price: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"invalid price: {value!r}")
    return result


def round_money(value: Number) -> Decimal:
    """Round monetary value to cents."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def multiply(value: Number, factor: Number) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def to_float(value: Number) -> float:
    """
    Convert Decimal to float for display or external APIs.

    Use only at boundaries, not for internal calculations.
    """
    return float(to_decimal(value))
