#!/usr/bin/env python3
"""Open a ledger gateway for the configured backend."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from ..core.config import Config
from .base import LedgerGateway
from .json_ledger import JsonLedger
from .quickbooks import QuickBooksLedger, QuickBooksSession


@contextmanager
def open_ledger(config: Config, backend: str | None = None, session_manager: Any = None) -> Iterator[LedgerGateway]:
    """
    Yield a gateway for one ledger session.

    Args:
        config: Application configuration
        backend: "quickbooks" or "json"; defaults to config.ledger.backend
        session_manager: Optional pre-built QBSessionManager for the QuickBooks backend

    Raises:
        ValueError: For an unknown backend
        LedgerConnectionError: If the QuickBooks session cannot be opened
    """
    backend = (backend or config.ledger.backend).lower()

    if backend == "json":
        yield JsonLedger(config.ledger.json_file)
    elif backend == "quickbooks":
        with QuickBooksSession(config.quickbooks, session_manager=session_manager) as session:
            yield QuickBooksLedger(session)
    else:
        raise ValueError(f"Unknown ledger backend: {backend}")
