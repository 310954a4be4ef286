#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

All amounts are handled as integer cents to avoid floating-point errors.

Currency Systems:
- Spreadsheet exports carry dollar strings ("$1,234.56", "(12.00)") or numeric cells
- The QuickBooks SDK returns amounts as doubles
- Internal calculations use cents: 100 cents = $1.00
- Display uses dollar strings: "$12.34"

Key Principles:
- Never compare or sum currency as floats
- Convert floats through Decimal with round-half-up to the nearest cent
- Reject unparseable input loudly; callers decide whether to skip the row
"""

import numbers
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

_CURRENCY_SYMBOLS = "$€£¥"


def cents_to_dollars_str(cents: int) -> str:
    """
    Convert cents to dollar string using pure integer arithmetic.

    Args:
        cents: Amount in cents

    Returns:
        Formatted dollar string

    Example:
        cents_to_dollars_str(4599) -> "45.99"
        cents_to_dollars_str(-5) -> "-0.05"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    dollars = abs_cents // 100
    remainder = abs_cents % 100

    if is_negative:
        return f"-{dollars}.{remainder:02d}"
    return f"{dollars}.{remainder:02d}"


def _decimal_to_cents(amount: Decimal, original: Any, exact: bool) -> int:
    cents = amount * 100
    if exact and cents != cents.to_integral_value():
        raise ValueError(f"Amount '{original}' has fractions of a cent")
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def float_to_cents(value: float, exact: bool = False) -> int:
    """
    Convert a float dollar amount to cents, rounding half up.

    The float is read at 15 significant digits, the precision spreadsheets
    keep, so that values such as 0.1 + 0.2 land on the intended cent. With `exact`, an amount with
    fractions of a cent raises ValueError instead of being rounded.

    Example:
        float_to_cents(65.0) -> 6500
        float_to_cents(12.345) -> 1235
    """
    value = float(value)
    if value != value or value in (float("inf"), float("-inf")):
        raise ValueError(f"Could not convert amount {value!r}")
    return _decimal_to_cents(Decimal(format(value, ".15g")), value, exact)


def parse_dollars_to_cents(dollars_str: str, exact: bool = False) -> int:
    """
    Parse a dollar string to cents.

    Accepts currency symbols, thousands separators, a leading minus sign and
    accounting-style parentheses for negatives. Fractions of a cent are
    rounded half up, or rejected when `exact` is set.

    Args:
        dollars_str: String representation of dollar amount
        exact: Reject amounts with fractions of a cent

    Returns:
        Amount in cents

    Raises:
        ValueError: If the string is empty, not a number, or (with `exact`)
            more precise than a cent

    Examples:
        parse_dollars_to_cents("12.34") -> 1234
        parse_dollars_to_cents("$1,234.56") -> 123456
        parse_dollars_to_cents("(12.50)") -> -1250
        parse_dollars_to_cents("12") -> 1200
    """
    clean = str(dollars_str).strip()
    if not clean:
        raise ValueError("Empty amount string")

    is_negative = False
    if clean.startswith("(") and clean.endswith(")"):
        is_negative = True
        clean = clean[1:-1]

    for symbol in _CURRENCY_SYMBOLS:
        clean = clean.replace(symbol, "")
    clean = clean.replace(",", "").replace('"', "").strip()

    if clean.startswith("-"):
        is_negative = not is_negative
        clean = clean[1:].strip()

    try:
        decimal_amount = Decimal(clean)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{dollars_str}'") from e

    if not decimal_amount.is_finite():
        raise ValueError(f"Could not parse amount '{dollars_str}'")

    cents = _decimal_to_cents(decimal_amount, dollars_str, exact)
    return -cents if is_negative else cents


def to_cents(value: Any, exact: bool = False) -> int:
    """
    Convert any supported amount representation to cents.

    Integers are treated as whole dollars, matching how spreadsheet readers
    return integral numeric cells. With `exact`, amounts with fractions of a
    cent are rejected rather than rounded.

    Raises:
        ValueError: If the value cannot be interpreted as an amount
    """
    if isinstance(value, bool):
        raise ValueError(f"Could not parse amount '{value}'")
    if isinstance(value, Decimal):
        return _decimal_to_cents(value, value, exact)
    if isinstance(value, numbers.Integral):
        return int(value) * 100
    if isinstance(value, numbers.Real):
        if value != value:  # NaN from empty spreadsheet cells
            raise ValueError("Empty amount")
        return float_to_cents(float(value), exact)
    return parse_dollars_to_cents(value, exact)


def format_cents(cents: int) -> str:
    """Format cents as dollar string with $ prefix, sign first ("-$12.34")."""
    if cents < 0:
        return f"-${cents_to_dollars_str(-cents)}"
    return f"${cents_to_dollars_str(cents)}"
