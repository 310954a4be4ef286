#!/usr/bin/env python3
"""
Ledger Gateway Interface

The narrow surface the rest of the tool needs from an accounting back-end:
read every deposit, and submit one new deposit.
"""

from dataclasses import dataclass
from typing import Protocol

from ..core.models import Deposit


class LedgerError(Exception):
    """Base class for ledger failures."""


class LedgerConnectionError(LedgerError):
    """The ledger could not be reached or a session could not be opened."""


class LedgerRequestError(LedgerError):
    """The ledger rejected a request or returned an unusable response."""


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of submitting one deposit: an assigned ID or an error message."""

    txn_id: str | None = None
    error: str | None = None

    @classmethod
    def succeeded(cls, txn_id: str) -> "SubmitResult":
        return cls(txn_id=txn_id)

    @classmethod
    def failed(cls, error: str) -> "SubmitResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.txn_id)


class LedgerGateway(Protocol):
    """Read/write access to deposits stored in a ledger."""

    def list_all(self) -> list[Deposit]:
        """
        Return every deposit in the ledger.

        Raises:
            LedgerError: If the ledger cannot be queried
        """
        ...

    def submit(self, deposit: Deposit) -> SubmitResult:
        """
        Store a new deposit.

        Rejections are reported in the returned SubmitResult, not raised.

        Raises:
            LedgerConnectionError: If the ledger is unreachable
        """
        ...
