"""Data models for ``account_ledger``.

Two shapes flow through the package:

- :class:`RawRow`: the four stripped text cells of one CSV record, validated
  only structurally (pydantic, strict strings).
- :class:`Transaction`: the typed, immutable value built from a ``RawRow``.
  Accounts hold their own copies, so a ``Transaction`` is never shared between
  the ledger log and an account.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class RawRow(BaseModel):
    """One CSV record in the fixed ``date, payer, payee, amount`` order.

    Cells are kept as text; typed parsing happens in
    :func:`account_ledger.ledger.to_transaction`.
    """

    model_config = ConfigDict(strict=True, extra="forbid", frozen=True, str_strip_whitespace=True)

    date: str
    payer: str = Field(min_length=1)
    payee: str = Field(min_length=1)
    amount: str


@dataclass(frozen=True, slots=True)
class Transaction:
    """A dated money movement from ``payer`` to ``payee``.

    In the ledger's canonical log ``amount`` is the positive magnitude. An
    account's copy carries the sign for that account: negative for the payer
    (debit), positive for the payee (credit).
    """

    date: date
    payer: str
    payee: str
    amount: Decimal

    def involves(self, account_name: str) -> bool:
        return account_name in (self.payer, self.payee)

    def copy(self, *, amount: Decimal | None = None) -> Transaction:
        """Return an independent copy, optionally with a different amount."""
        if amount is None:
            return replace(self)
        return replace(self, amount=amount)


__all__ = ["RawRow", "Transaction"]
