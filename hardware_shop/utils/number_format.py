"""Number parsing and rounding utilities for request payloads."""
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal('0.01')
INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")

# INTEGER columns (ids, stock, quantity)
MAX_INTEGER = 2 ** 31 - 1
MIN_INTEGER = -2 ** 31
# Numeric(10, 2): anything at or above this rounds to 100000000.00
MONEY_LIMIT = Decimal('99999999.995')


class OutOfRangeError(ValueError):
    """A parsed number does not fit the column it is stored in."""


def fits_integer(value) -> bool:
    return MIN_INTEGER <= value <= MAX_INTEGER


def fits_money(value: Decimal) -> bool:
    return abs(value) < MONEY_LIMIT


def round2(value) -> Decimal:
    """
    Round a money amount to 2 decimal places, half-up.

    Sales store the rounded values and reports sum them as stored, so every
    place that computes a total or profit must go through this function.
    """
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def parse_decimal(value) -> Decimal:
    """
    Parse a JSON number or numeric string to Decimal.

    Raises:
        ValueError: if the value is missing, not numeric, or not finite.
    """
    if value is None or isinstance(value, bool):
        raise ValueError('Not a number')

    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError('Not a number')

    try:
        # str() keeps floats like 0.1 from expanding to binary noise
        decimal_value = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValueError('Not a number')

    if not decimal_value.is_finite():
        raise ValueError('Not a number')

    return decimal_value


def parse_int(value) -> int:
    """
    Parse an integer from a JSON number or string.

    Integral floats (``3.0``) are accepted; fractional values are rejected.

    Raises:
        ValueError: if the value is not an integer.
        OutOfRangeError: if it does not fit an INTEGER column.
    """
    if value is None or isinstance(value, bool):
        raise ValueError('Not an integer')

    if isinstance(value, int):
        result = value
    elif isinstance(value, str) and INTEGER_PATTERN.match(value.strip()):
        result = int(value.strip())
    else:
        decimal_value = parse_decimal(value)
        if decimal_value != decimal_value.to_integral_value():
            raise ValueError('Not an integer')
        if not fits_integer(decimal_value):
            raise OutOfRangeError('Integer out of range')
        result = int(decimal_value)

    if not fits_integer(result):
        raise OutOfRangeError('Integer out of range')
    return result


def parse_stock_quantity(value) -> int:
    """
    Parse a stock quantity; absent or unparseable input counts as 0.

    Raises:
        OutOfRangeError: if the number does not fit an INTEGER column.
    """
    if value is None or value == '':
        return 0
    try:
        decimal_value = parse_decimal(value)
    except ValueError:
        return 0
    if not fits_integer(decimal_value):
        raise OutOfRangeError('Stock quantity out of range')
    return int(decimal_value)


def to_number(value):
    """Convert a Decimal (or None) to a JSON-friendly float."""
    if value is None:
        return 0.0
    return float(value)
