#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable date wrapper with consistent formatting for deposit dates coming
from spreadsheets, CSV exports and the QuickBooks SDK.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

# Formats seen in bank-date columns, tried in order
SUPPORTED_FORMATS = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%Y/%m/%d",
    "%m-%d-%Y",
    "%d-%b-%Y",
    "%b %d, %Y",
    "%Y-%m-%d %H:%M:%S",
)


@dataclass(frozen=True, order=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, format: str | None = None) -> "FinancialDate":
        """
        Parse from string.

        Args:
            date_str: Date string to parse
            format: Explicit strptime format. When omitted, every entry of
                SUPPORTED_FORMATS is tried in order.

        Returns:
            FinancialDate object

        Raises:
            ValueError: If the string matches none of the formats
        """
        text = date_str.strip()
        if format is not None:
            return cls(date=datetime.strptime(text, format).date())

        for candidate in SUPPORTED_FORMATS:
            try:
                return cls(date=datetime.strptime(text, candidate).date())
            except ValueError:
                continue
        raise ValueError(f"Could not parse date '{date_str}'")

    @classmethod
    def from_value(cls, value: Any) -> "FinancialDate":
        """
        Build from whatever a reader handed back: str, date, datetime,
        pandas Timestamp or a COM date.

        Raises:
            ValueError: If the value is empty or cannot be interpreted
        """
        if value is None:
            raise ValueError("Date is required but was None")
        if isinstance(value, FinancialDate):
            return value
        if isinstance(value, str):
            if not value.strip():
                raise ValueError("Date is required but was empty")
            return cls.from_string(value)
        # datetime (and pandas.Timestamp / pywintypes datetime) before plain date
        if isinstance(value, datetime):
            return cls(date=value.date())
        if isinstance(value, date):
            return cls(date=value)
        if hasattr(value, "year") and hasattr(value, "month") and hasattr(value, "day"):
            return cls(date=date(value.year, value.month, value.day))
        raise ValueError(f"Unsupported date value: {value!r}")

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def __str__(self) -> str:
        return self.to_iso_string()

    def __repr__(self) -> str:
        return f"FinancialDate(date={self.date!r})"
