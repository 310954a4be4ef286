#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer cents internally.
Prevents floating-point errors and provides type-safe currency operations.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from .currency import cents_to_dollars_str, float_to_cents, format_cents, to_cents


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents (USD).

    Examples:
        >>> deposit = Money.from_dollars("$1,250.00")
        >>> str(deposit)
        '$1250.00'

        >>> Money.from_float(65.0) - Money.from_cents(5000)
        Money(cents=1500)

        >>> Money.from_cents(5000).is_close(Money.from_cents(5001))
        True
    """

    cents: int

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def from_float(cls, dollars: float) -> "Money":
        """Create Money from a float dollar amount (SDK doubles, numeric cells)."""
        return cls(cents=float_to_cents(dollars))

    @classmethod
    def from_dollars(cls, dollars: Union[str, int, float, Decimal], exact: bool = False) -> "Money":
        """
        Parse from a dollar string like '$123.45', or a numeric dollar value.

        Fractions of a cent are rounded half up unless `exact` is set.

        Raises:
            ValueError: If the value is not a parseable amount, or has
                fractions of a cent when `exact` is set
        """
        return cls(cents=to_cents(dollars, exact=exact))

    @classmethod
    def zero(cls) -> "Money":
        """Zero dollars."""
        return cls(cents=0)

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_float(self) -> float:
        """Get value as float dollars, for SDKs that only accept doubles."""
        return self.cents / 100

    def to_dollars(self) -> str:
        """Get formatted dollar string."""
        return str(self)

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(cents=abs(self.cents))

    def is_close(self, other: "Money", tolerance: "Money | None" = None) -> bool:
        """
        Check whether two amounts agree within a tolerance (default one cent).

        Args:
            other: Amount to compare against
            tolerance: Largest accepted absolute difference

        Returns:
            True if abs(self - other) <= tolerance
        """
        if tolerance is None:
            tolerance = ONE_CENT
        return abs(self.cents - other.cents) <= tolerance.cents

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(cents=self.cents - other.cents)

    def __neg__(self) -> "Money":
        return Money(cents=-self.cents)

    def __lt__(self, other: "Money") -> bool:
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as dollar string."""
        return format_cents(self.cents)

    def __repr__(self) -> str:
        return f"Money(cents={self.cents})"

    def plain(self) -> str:
        """Format without the currency symbol ("-12.34")."""
        return cents_to_dollars_str(self.cents)


ONE_CENT = Money(cents=1)


def sum_money(amounts: "list[Money] | tuple[Money, ...]") -> Money:
    """Sum an iterable of Money values (empty sum is zero)."""
    total = 0
    for amount in amounts:
        total += amount.cents
    return Money(cents=total)
