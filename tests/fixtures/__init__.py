"""
Test Fixtures and Utilities

Shared test data and fakes for the test suite.

This module provides:
- Deposit / DepositLine factories with sensible defaults
- An in-memory ledger gateway
- Fake QBFC COM objects so no test needs QuickBooks
- Source export writers (CSV and Excel)

All test data is synthetic.
"""
