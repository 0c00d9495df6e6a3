"""Typed errors raised by ``account_ledger``.

Every error derives from :class:`LedgerError`, which is a ``ValueError`` so
callers that already guard input validation with ``except ValueError`` keep
working. Account lookups never raise: a missing account is signalled by
``None`` from :meth:`Ledger.find_account` and :meth:`Ledger.balance`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Transaction


class LedgerError(ValueError):
    """Base class for all ledger errors."""


class NoInputError(LedgerError):
    """``parse`` was called without a usable source."""

    def __init__(self, message: str = "Nothing to parse") -> None:
        super().__init__(message)


class MalformedRowError(LedgerError):
    """Structural CSV problem: bad quoting, wrong field count, empty identifier."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"{message} (record {line})"
        super().__init__(message)


class InvalidDateError(LedgerError):
    """A date value is not ISO-8601 compatible."""

    def __init__(self, raw: object, *, line: int | None = None) -> None:
        self.raw = raw
        self.line = line
        message = f"invalid date format in input: {raw!r}"
        if line is not None:
            message = f"{message} (record {line})"
        super().__init__(message)


class InvalidAmountError(LedgerError):
    """An amount value is not a finite decimal number."""

    def __init__(self, raw: object, *, line: int | None = None) -> None:
        self.raw = raw
        self.line = line
        message = f"invalid amount value in input: {raw!r}"
        if line is not None:
            message = f"{message} (record {line})"
        super().__init__(message)


class UnrelatedTransactionError(LedgerError):
    """An account was asked to record a transaction that does not name it."""

    def __init__(self, account: str, transaction: Transaction) -> None:
        self.account = account
        self.transaction = transaction
        super().__init__(
            f"Transaction is not associated with account {account!r} "
            f"(payer={transaction.payer!r}, payee={transaction.payee!r})"
        )


__all__ = [
    "InvalidAmountError",
    "InvalidDateError",
    "LedgerError",
    "MalformedRowError",
    "NoInputError",
    "UnrelatedTransactionError",
]
