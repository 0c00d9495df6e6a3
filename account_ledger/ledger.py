"""The ledger: canonical transaction log, account registry and CSV ingestion.

Ingestion is a single pass over a CSV source. Each record is validated into
a :class:`~account_ledger.models.Transaction` by the pure :func:`to_transaction`
and then mirrored into the payer's and payee's accounts. The first bad record
aborts the pass; records before it stay ingested (there is no rollback).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date
from decimal import Decimal
from os import PathLike
from types import MappingProxyType

from pydantic import ValidationError

from .account import Account
from .config import LedgerSettings, load_settings
from .csv_source import CsvSource, check_source, iter_records
from .errors import LedgerError, MalformedRowError
from .logging_setup import get_logger
from .models import RawRow, Transaction
from .normalizers import parse_amount, parse_iso_date

logger = get_logger("account_ledger.ledger")

COLUMNS: tuple[str, str, str, str] = ("date", "payer", "payee", "amount")


def to_row(fields: Sequence[str], *, line: int | None = None) -> RawRow:
    """Map the four CSV fields of one record onto :class:`RawRow`."""

    if len(fields) != len(COLUMNS):
        raise MalformedRowError(
            f"expected {len(COLUMNS)} fields ({', '.join(COLUMNS)}), got {len(fields)}",
            line=line,
        )
    try:
        return RawRow(**dict(zip(COLUMNS, fields, strict=True)))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise MalformedRowError(f"invalid row: {problems}", line=line) from exc


def to_transaction(row: RawRow | Mapping[str, str], *, line: int | None = None) -> Transaction:
    """Validate a raw row into a canonical :class:`Transaction`.

    The date is checked before the amount. The canonical amount is the
    magnitude of the parsed value: direction comes from payer/payee only.
    Never mutates ``row``.
    """

    if not isinstance(row, RawRow):
        try:
            row = RawRow.model_validate(dict(row))
        except ValidationError as exc:
            raise MalformedRowError(
                f"invalid row: {exc.error_count()} problem(s)", line=line
            ) from exc

    when = parse_iso_date(row.date, line=line)
    amount = parse_amount(row.amount, line=line)
    return Transaction(date=when, payer=row.payer, payee=row.payee, amount=abs(amount))


class Ledger:
    """All transactions seen so far and the accounts they name.

    Not safe for concurrent ingestion: run one ``parse`` at a time per ledger.
    """

    COLUMNS = COLUMNS

    def __init__(self, settings: LedgerSettings | None = None) -> None:
        self._settings = settings
        self._accounts: dict[str, Account] = {}
        self._transactions: list[Transaction] = []

    def __repr__(self) -> str:
        return (
            f"Ledger(transactions={len(self._transactions)}, accounts={len(self._accounts)})"
        )

    def __len__(self) -> int:
        return len(self._transactions)

    def __contains__(self, name: object) -> bool:
        return name in self._accounts

    @property
    def settings(self) -> LedgerSettings:
        if self._settings is None:
            # Environment only; reading .env is left to the host application.
            self._settings = load_settings(dotenv=False)
        return self._settings

    @property
    def accounts(self) -> Mapping[str, Account]:
        return MappingProxyType(self._accounts)

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return tuple(self._transactions)

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    def find_or_create_account(self, name: str) -> Account:
        """Return the account called ``name``, registering an empty one if needed."""

        account = self._accounts.get(name)
        if account is None:
            account = self._accounts[name] = Account(name)
            logger.debug("created account %r", name)
        return account

    def find_account(self, name: str) -> Account | None:
        """Return the account called ``name`` or ``None``; never creates one."""
        return self._accounts.get(name)

    def balance(self, name: str, at_date: str | date | None = None) -> Decimal | None:
        """Balance of account ``name`` before ``at_date``; ``None`` if unknown."""

        account = self.find_account(name)
        if account is None:
            return None
        return account.balance(at_date)

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def create_transaction(self, record: Transaction) -> None:
        """Append ``record`` to the log and mirror it into both accounts.

        The payee's account is updated before the payer's. Each account stores
        its own copy, so the canonical record is never shared.
        """

        self._transactions.append(record)
        self.find_or_create_account(record.payee).add_transaction(record)
        self.find_or_create_account(record.payer).add_transaction(record)

    async def parse(self, source: CsvSource | None = None) -> Ledger:
        """Ingest ``date,payer,payee,amount`` CSV records from ``source``.

        ``source`` may be the CSV text itself, bytes, a file-like object or an
        async iterable of text/byte chunks. Resolves to this ledger once every
        record has been consumed. Raises
        :class:`~account_ledger.errors.NoInputError` before reading anything
        when ``source`` is missing, and the first validation error otherwise.
        """

        check_source(source)
        settings = self.settings
        count = 0
        logger.debug("parse start source=%s", type(source).__name__)
        try:
            async for line, fields in iter_records(
                source,  # type: ignore[arg-type]
                encoding=settings.encoding,
                delimiter=settings.delimiter,
            ):
                record = to_transaction(to_row(fields, line=line), line=line)
                self.create_transaction(record)
                count += 1
        except LedgerError as exc:
            logger.warning("parse rejected after %d record(s): %s", count, exc)
            raise
        logger.info(
            "parsed %d record(s); ledger now has %d transaction(s), %d account(s)",
            count,
            len(self._transactions),
            len(self._accounts),
        )
        return self

    async def parse_file(self, path: str | PathLike[str]) -> Ledger:
        """Open ``path`` as bytes and :meth:`parse` it. I/O errors propagate."""

        logger.debug("parse_file path=%s", path)
        with open(path, "rb") as fh:
            return await self.parse(fh)


__all__ = ["COLUMNS", "Ledger", "to_row", "to_transaction"]
