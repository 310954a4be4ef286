#!/usr/bin/env python3
"""
QuickBooks Desktop Ledger

Reads and adds deposits through the QuickBooks Foundation Classes (QBFC)
COM SDK. The COM session manager comes from pywin32 and is only imported
when a session is opened without an injected manager, so the module is
importable on hosts without QuickBooks.

QBFC object model used here:
- QBSessionManager: OpenConnection / BeginSession / DoRequests / EndSession / CloseConnection
- DepositQueryRq -> DepositRet list (with DepositLineRet lines)
- DepositAddRq -> DepositRet carrying the assigned TxnID
"""

import logging
from datetime import datetime, time
from typing import Any

from ..core.config import QuickBooksConfig
from ..core.dates import FinancialDate
from ..core.models import Deposit, DepositLine
from ..core.money import Money
from .base import LedgerConnectionError, LedgerRequestError, SubmitResult

logger = logging.getLogger(__name__)

# QBFC enum values
OPEN_MODE_DONT_CARE = 2  # ENOpenMode.omDontCare
ON_ERROR_CONTINUE = 1  # ENRqOnError.roeContinue


def _value(field: Any) -> Any:
    """Read an optional QBFC field; unset fields come back as None."""
    if field is None:
        return None
    return field.GetValue()


def _text(field: Any) -> str:
    value = _value(field)
    return "" if value is None else str(value)


def _ref_parts(ref: Any) -> tuple[str, str]:
    """(ListID, FullName) of a QBFC reference object."""
    if ref is None:
        return "", ""
    return _text(ref.ListID), _text(ref.FullName)


def _dispatch_session_manager(sdk_major_version: int) -> Any:
    try:
        import win32com.client
    except ImportError as e:
        raise LedgerConnectionError(
            "pywin32 is required to talk to QuickBooks Desktop (Windows only)"
        ) from e

    prog_id = f"QBFC{sdk_major_version}.QBSessionManager"
    try:
        return win32com.client.Dispatch(prog_id)
    except Exception as e:
        raise LedgerConnectionError(f"Could not create {prog_id}: {e}") from e


class QuickBooksSession:
    """
    One open QuickBooks connection and session.

    Use as a context manager; the session is ended and the connection closed
    on exit even if the body raised.

    Example:
        >>> with QuickBooksSession(config.quickbooks) as session:
        ...     deposits = QuickBooksLedger(session).list_all()
    """

    def __init__(self, config: QuickBooksConfig, session_manager: Any = None):
        """
        Args:
            config: Connection settings
            session_manager: Pre-built QBSessionManager. When None, one is
                created through win32com on enter.
        """
        self.config = config
        self._manager = session_manager
        self._connection_open = False
        self._session_begun = False

    def open(self) -> "QuickBooksSession":
        """Open the connection and begin the session."""
        if self._manager is None:
            self._manager = _dispatch_session_manager(self.config.sdk_major_version)

        try:
            self._manager.OpenConnection("", self.config.app_name)
            self._connection_open = True
            self._manager.BeginSession(self.config.company_file, OPEN_MODE_DONT_CARE)
            self._session_begun = True
        except Exception as e:
            self.close()
            raise LedgerConnectionError(f"Could not open QuickBooks session: {e}") from e

        logger.debug("QuickBooks session opened for %s", self.config.app_name)
        return self

    def close(self) -> None:
        """End the session and close the connection, if open."""
        if self._session_begun:
            self._manager.EndSession()
            self._session_begun = False
        if self._connection_open:
            self._manager.CloseConnection()
            self._connection_open = False

    @property
    def is_open(self) -> bool:
        return self._session_begun

    def __enter__(self) -> "QuickBooksSession":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def create_request(self) -> Any:
        """Create a request message set that keeps going after a failed request."""
        if not self.is_open:
            raise LedgerConnectionError("QuickBooks session is not open")
        request = self._manager.CreateMsgSetRequest(
            self.config.country,
            self.config.sdk_major_version,
            self.config.sdk_minor_version,
        )
        request.Attributes.OnError = ON_ERROR_CONTINUE
        return request

    def send(self, request: Any) -> Any:
        """
        Send a request message set and return its first response.

        Raises:
            LedgerRequestError: If the call fails, the response is empty or the
                status code signals an error
        """
        try:
            response_set = self._manager.DoRequests(request)
        except Exception as e:
            raise LedgerRequestError(f"QuickBooks request failed: {e}") from e

        if response_set is None:
            raise LedgerRequestError("No response received from QuickBooks")

        response_list = response_set.ResponseList
        if response_list is None or response_list.Count == 0:
            raise LedgerRequestError("Empty response list from QuickBooks")

        response = response_list.GetAt(0)
        if response.StatusCode < 0:
            raise LedgerRequestError(f"QuickBooks error: {response.StatusMessage} (Code {response.StatusCode})")
        if response.StatusCode > 0:
            logger.warning("QuickBooks warning: %s (Code %s)", response.StatusMessage, response.StatusCode)
        return response


class QuickBooksLedger:
    """LedgerGateway backed by an open QuickBooksSession."""

    def __init__(self, session: QuickBooksSession):
        self.session = session

    def list_all(self) -> list[Deposit]:
        """Query every deposit, including its lines."""
        request = self.session.create_request()
        query = request.AppendDepositQueryRq()
        query.IncludeLineItems.SetValue(True)

        response = self.session.send(request)
        deposits: list[Deposit] = []

        ret_list = response.Detail
        if ret_list is not None:
            for i in range(ret_list.Count):
                deposits.append(deposit_from_ret(ret_list.GetAt(i)))

        logger.info("Retrieved %d deposit transactions from QuickBooks", len(deposits))
        return deposits

    def submit(self, deposit: Deposit) -> SubmitResult:
        """Add one deposit; the returned TxnID is not stored on the deposit here."""
        try:
            request = self.session.create_request()
            build_deposit_add(request, deposit)
            response = self.session.send(request)
        except LedgerRequestError as e:
            logger.error("Error adding deposit with memo '%s': %s", deposit.key, e)
            return SubmitResult.failed(str(e))

        txn_id = _text(response.Detail.TxnID) if response.Detail is not None else ""
        if not txn_id:
            return SubmitResult.failed("Unexpected response type from QuickBooks")
        return SubmitResult.succeeded(txn_id)


def deposit_from_ret(ret: Any) -> Deposit:
    """Convert a QBFC DepositRet into a Deposit."""
    _, deposit_to_account = _ref_parts(ret.DepositToAccountRef)
    total = _value(ret.DepositTotal)

    deposit = Deposit(
        key=_text(ret.Memo),
        txn_id=_text(ret.TxnID),
        deposit_date=FinancialDate.from_value(_value(ret.TxnDate)),
        deposit_to_account=deposit_to_account,
        total=Money.from_float(total) if total is not None else Money.zero(),
    )

    line_list = ret.DepositLineRetList
    if line_list is not None:
        for j in range(line_list.Count):
            line_ret = line_list.GetAt(j)
            account_list_id, account_name = _ref_parts(line_ret.AccountRef)
            entity_list_id, entity_name = _ref_parts(line_ret.EntityRef)
            amount = _value(line_ret.Amount)
            deposit.lines.append(
                DepositLine(
                    amount=Money.from_float(amount) if amount is not None else Money.zero(),
                    account_name=account_name,
                    account_list_id=account_list_id,
                    received_from_name=entity_name,
                    received_from_list_id=entity_list_id,
                    memo=_text(line_ret.Memo),
                )
            )

    return deposit


def build_deposit_add(request: Any, deposit: Deposit) -> Any:
    """
    Append a DepositAddRq for `deposit` to a request message set.

    The deposit key goes into the deposit memo. Counterparties are referenced
    by list ID when known, otherwise by name.

    Raises:
        LedgerRequestError: If QBFC rejects one of the values
    """
    try:
        deposit_add = request.AppendDepositAddRq()
        deposit_add.TxnDate.SetValue(datetime.combine(deposit.deposit_date.date, time()))

        if deposit.key.strip():
            deposit_add.Memo.SetValue(deposit.key)
        if deposit.deposit_to_account.strip():
            deposit_add.DepositToAccountRef.FullName.SetValue(deposit.deposit_to_account)

        for line in deposit.lines:
            info = deposit_add.DepositLineAddList.Append().ORDepositLineAdd.DepositInfo

            if line.received_from_list_id.strip():
                info.EntityRef.ListID.SetValue(line.received_from_list_id)
            elif line.received_from_name.strip():
                info.EntityRef.FullName.SetValue(line.received_from_name)

            if line.account_name.strip():
                info.AccountRef.FullName.SetValue(line.account_name)
            if line.memo.strip():
                info.Memo.SetValue(line.memo)

            info.Amount.SetValue(line.amount.to_float())
    except Exception as e:
        raise LedgerRequestError(f"Could not build deposit '{deposit.key}': {e}") from e

    return deposit_add
