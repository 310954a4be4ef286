"""
Core Utilities Package

Shared primitives and configuration used by the importer, the ledger
adapters and the reconciliation engine.

This package provides:
- Currency handling with integer cents
- Money and FinancialDate value types
- Deposit / DepositLine record models
- Configuration management for environment-specific settings
"""

from .config import Config, Environment, get_config, reload_config
from .currency import cents_to_dollars_str, float_to_cents, format_cents, parse_dollars_to_cents, to_cents
from .dates import FinancialDate
from .models import Deposit, DepositLine
from .money import ONE_CENT, Money, sum_money

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "get_config",
    "reload_config",
    # Currency utilities
    "cents_to_dollars_str",
    "float_to_cents",
    "format_cents",
    "parse_dollars_to_cents",
    "to_cents",
    # Value types
    "FinancialDate",
    "Money",
    "ONE_CENT",
    "sum_money",
    # Record models
    "Deposit",
    "DepositLine",
]
