"""Public interface for the ``account_ledger`` package.

Ingests ``date,payer,payee,amount`` CSV records into a :class:`Ledger` and
answers per-account balance queries at any day. This module only re-exports
the stable import surface.
"""

from .account import Account
from .config import LedgerSettings, load_settings
from .errors import (
    InvalidAmountError,
    InvalidDateError,
    LedgerError,
    MalformedRowError,
    NoInputError,
    UnrelatedTransactionError,
)
from .ledger import COLUMNS, Ledger, to_row, to_transaction
from .logging_setup import configure_logging, get_logger
from .models import RawRow, Transaction

__all__ = [
    # Core
    "Account",
    "Ledger",
    "COLUMNS",
    "to_row",
    "to_transaction",
    # Models
    "RawRow",
    "Transaction",
    # Errors
    "LedgerError",
    "NoInputError",
    "MalformedRowError",
    "InvalidDateError",
    "InvalidAmountError",
    "UnrelatedTransactionError",
    # Ambient
    "LedgerSettings",
    "load_settings",
    "configure_logging",
    "get_logger",
]
