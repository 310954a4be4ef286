#!/usr/bin/env python3
"""
Spreadsheet Column Layout

Column names of the credit/non-vendor export and the mapping from its
Tier 1 type to the ledger income account.
"""

CHILD_ID = "Child ID"
PARENT_ID = "Parent ID"
BANK_DATE = "Bank Date"
CUSTOMER = "Customer"
CHECK_AMOUNT = "Check Amount"
CHART_OF_ACCOUNT_ID = "Tier 2 - Chart of Account ID"
CHART_OF_ACCOUNT = "Tier 2 - Chart of Account"
TIER1_TYPE = "Tier 1 - Type"
DESCRIPTION = "Description"
MEMO = "Memo"

REQUIRED_COLUMNS = (CHILD_ID, CHECK_AMOUNT, CHART_OF_ACCOUNT, TIER1_TYPE)

# Tier 1 type -> ledger account; "Other Income" depends on the Tier 2 account
TYPE_ACCOUNTS = {
    "Income": "Sales",
    "Expense": "Automobile Expense",
    "Equity": "Shareholder Distributions",
}
OTHER_INCOME_TYPE = "Other Income"
RENTAL_ACCOUNT = "Rental"
OTHER_INCOME_ACCOUNT = "Misc Credits"
DEFAULT_ACCOUNT = "Sales"


def account_for(tier1_type: str | None, chart_of_account: str | None) -> str:
    """
    Pick the ledger account for a row.

    Example:
        account_for("Other Income", "Rental") -> "Rental"
        account_for("Other Income", "Refund") -> "Misc Credits"
        account_for(None, None) -> "Sales"
    """
    tier1 = (tier1_type or "").strip()
    if tier1 == OTHER_INCOME_TYPE:
        if (chart_of_account or "").strip() == RENTAL_ACCOUNT:
            return RENTAL_ACCOUNT
        return OTHER_INCOME_ACCOUNT
    return TYPE_ACCOUNTS.get(tier1, DEFAULT_ACCOUNT)
