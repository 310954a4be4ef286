#!/usr/bin/env python3
"""
Deposit Comparator

Tolerant equality between a ledger deposit and an incoming one.

Lines are compared by summing amounts per account name rather than
position by position, so the same deposit with its lines in a different
order still compares equal. Both the boolean check and the difference
report use that grouped-sum rule; two lines of 10 + 30 on "Sales" equal a
single 40 on "Sales" as long as the line counts also agree.

All amount checks allow a one cent difference.
"""

from ..core.models import Deposit
from ..core.money import ONE_CENT, Money
from .models import FieldDelta

AMOUNT_TOLERANCE = ONE_CENT


def _account_union(existing: dict[str, Money], incoming: dict[str, Money]) -> list[str]:
    """Account names from both sides, existing first, each once."""
    names = list(existing)
    names.extend(name for name in incoming if name not in existing)
    return names


def deposits_equal(existing: Deposit, incoming: Deposit) -> bool:
    """
    Decide whether two deposits with the same key carry the same content.

    Rules are checked in order and the first failure decides:
    1. deposit-to account names match exactly
    2. line counts match
    3. totals agree within one cent
    4. per-account summed line amounts agree within one cent, over the
       union of accounts from both sides (an absent account counts as zero)

    Dates, memos and counterparties are not compared.
    """
    if existing.deposit_to_account != incoming.deposit_to_account:
        return False

    if existing.line_count != incoming.line_count:
        return False

    if not existing.total.is_close(incoming.total, AMOUNT_TOLERANCE):
        return False

    existing_by_account = existing.amounts_by_account()
    incoming_by_account = incoming.amounts_by_account()
    for account in _account_union(existing_by_account, incoming_by_account):
        existing_amount = existing_by_account.get(account, Money.zero())
        incoming_amount = incoming_by_account.get(account, Money.zero())
        if not existing_amount.is_close(incoming_amount, AMOUNT_TOLERANCE):
            return False

    return True


def deposit_differences(existing: Deposit, incoming: Deposit) -> list[FieldDelta]:
    """
    List every difference between two deposits, for human review.

    Unlike `deposits_equal` this does not stop at the first mismatch.

    Returns:
        FieldDelta entries for the deposit account, total, line count and each
        account whose summed amount differs by more than one cent. Empty when
        the deposits are equal.
    """
    deltas: list[FieldDelta] = []

    if existing.deposit_to_account != incoming.deposit_to_account:
        deltas.append(
            FieldDelta(
                field="deposit_to_account",
                existing=f"'{existing.deposit_to_account}'",
                incoming=f"'{incoming.deposit_to_account}'",
            )
        )

    if not existing.total.is_close(incoming.total, AMOUNT_TOLERANCE):
        deltas.append(FieldDelta(field="total", existing=str(existing.total), incoming=str(incoming.total)))

    if existing.line_count != incoming.line_count:
        deltas.append(
            FieldDelta(
                field="line_count",
                existing=str(existing.line_count),
                incoming=str(incoming.line_count),
            )
        )

    existing_by_account = existing.amounts_by_account()
    incoming_by_account = incoming.amounts_by_account()
    for account in _account_union(existing_by_account, incoming_by_account):
        existing_amount = existing_by_account.get(account, Money.zero())
        incoming_amount = incoming_by_account.get(account, Money.zero())
        if not existing_amount.is_close(incoming_amount, AMOUNT_TOLERANCE):
            deltas.append(
                FieldDelta(
                    field=f"account:{account}",
                    existing=str(existing_amount),
                    incoming=str(incoming_amount),
                )
            )

    return deltas
