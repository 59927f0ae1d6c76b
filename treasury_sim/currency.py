"""
Currency Module

Currency codes handled by the treasury and Decimal helpers for amounts.
NEVER uses float for monetary values: floats are converted through str().
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from enum import Enum
from typing import Any
import re

# High precision so conversion results are exact for the rates in use
getcontext().prec = 28


class Currency(Enum):
    """Currency codes with display precision"""
    KES = ("KES", 2)  # Kenyan Shilling
    USD = ("USD", 2)  # US Dollar
    NGN = ("NGN", 2)  # Nigerian Naira

    def __init__(self, code: str, precision: int):
        self.code = code
        self.precision = precision

    @classmethod
    def from_code(cls, code: str) -> 'Currency':
        """Look up a currency by its ISO code"""
        try:
            return cls[code.strip().upper()]
        except (KeyError, AttributeError):
            raise ValueError(f"Unknown currency code: {code!r}")


ZERO = Decimal('0')

_GROUPED_NUMBER = re.compile(r'^[+-]?\d{1,3}(,\d{3})+(\.\d*)?$')


def to_decimal(value: Any) -> Decimal:
    """
    Coerce a numeric value to Decimal

    Args:
        value: Decimal, int, float or numeric string

    Returns:
        Decimal value (may be NaN or infinite, callers check finiteness)

    Raises:
        ValueError: If value cannot be interpreted as a number
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError("Boolean is not a monetary amount")
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    if isinstance(value, str):
        return decimal_from_string(value)
    raise ValueError(f"Cannot convert {type(value).__name__} to Decimal")


def decimal_from_string(value: str) -> Decimal:
    """
    Convert string to Decimal

    Surrounding whitespace and well-formed thousands separators
    ("1,234.56") are accepted; anything else must be a complete
    Decimal literal.

    Raises:
        ValueError: If string cannot be converted to a Decimal
    """
    if not value or not value.strip():
        raise ValueError("Value must be a non-empty string")

    clean_value = value.strip()
    if _GROUPED_NUMBER.match(clean_value):
        clean_value = clean_value.replace(',', '')

    try:
        return Decimal(clean_value)
    except InvalidOperation:
        raise ValueError(f"Cannot convert '{value}' to Decimal")


def is_positive_amount(amount: Decimal) -> bool:
    """True for finite amounts strictly greater than zero"""
    return amount.is_finite() and amount > ZERO


def round_to_currency(amount: Decimal, currency: Currency) -> Decimal:
    """Round to the display precision of the currency"""
    return amount.quantize(
        Decimal('0.1') ** currency.precision,
        rounding=ROUND_HALF_UP
    )


def format_amount(amount: Decimal, currency: Currency) -> str:
    """Format for display, e.g. 'USD 1,234.56'"""
    rounded = round_to_currency(amount, currency)
    return f"{currency.code} {rounded:,.{currency.precision}f}"
