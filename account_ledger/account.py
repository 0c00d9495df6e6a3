"""A single account's transaction history and point-in-time balances."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from .errors import UnrelatedTransactionError
from .logging_setup import get_logger
from .models import Transaction
from .normalizers import parse_iso_date

logger = get_logger("account_ledger.account")


class Account:
    """Transactions naming one account, stored as signed, account-owned copies.

    Copies are kept in arrival order, which need not be date order.
    """

    __slots__ = ("_name", "_transactions")

    def __init__(self, name: str) -> None:
        self._name = name
        self._transactions: list[Transaction] = []

    def __repr__(self) -> str:
        return f"Account(name={self._name!r}, transactions={len(self._transactions)})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return tuple(self._transactions)

    def credit(self, record: Transaction) -> None:
        """Store a copy of ``record`` as money arriving in this account."""
        self._transactions.append(record.copy())

    def debit(self, record: Transaction) -> None:
        """Store a copy of ``record`` with its amount negated (money leaving)."""
        self._transactions.append(record.copy(amount=-record.amount))

    def add_transaction(self, record: Transaction) -> None:
        """Debit when this account pays, credit when it is paid.

        A transaction where this account is both payer and payee is a debit.
        """

        if not record.involves(self._name):
            raise UnrelatedTransactionError(self._name, record)
        if record.payer == self._name:
            self.debit(record)
        else:
            self.credit(record)

    def balance(self, at_date: str | date | None = None) -> Decimal:
        """Sum of signed amounts dated strictly before ``at_date``.

        ``at_date`` defaults to today. Text must be ISO-8601; anything else
        raises :class:`~account_ledger.errors.InvalidDateError`. Comparison is
        by calendar day, so transactions dated on ``at_date`` are excluded.
        """

        cutoff = date.today() if at_date is None else parse_iso_date(at_date)
        total = sum(
            (trx.amount for trx in self._transactions if trx.date < cutoff),
            start=Decimal("0"),
        )
        logger.debug("balance name=%s at=%s total=%s", self._name, cutoff.isoformat(), total)
        return total


__all__ = ["Account"]
