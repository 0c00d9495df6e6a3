"""Field normalizers turning raw CSV cells into typed values.

Both helpers are pure: they never mutate their input and raise the typed
errors from :mod:`account_ledger.errors` naming the offending raw value.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from .errors import InvalidAmountError, InvalidDateError

_REDUCED_FORMS = (
    ("%Y", re.compile(r"\d{4}")),
    ("%Y-%m", re.compile(r"\d{4}-\d{2}")),
    ("%Y-%j", re.compile(r"\d{4}-\d{3}")),
    ("%Y%j", re.compile(r"\d{7}")),
)


def parse_iso_date(value: str | date, *, line: int | None = None) -> date:
    """Return the calendar day of an ISO-8601 date or date-time.

    Accepts ``YYYY-MM-DD`` and the other forms understood by
    :meth:`date.fromisoformat` (basic ``YYYYMMDD``, ISO week dates), as well as
    date-times with an optional offset (``2015-01-16T09:30:00Z``) and the
    reduced forms ``YYYY``, ``YYYY-MM`` and ordinal ``YYYY-DDD`` (first day of
    the year or month). Time of day is dropped. ``date``/``datetime``
    objects are accepted as-is.
    """

    # datetime is a subclass of date; check it first.
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(value, line=line)

    s = value.strip()
    if not s:
        raise InvalidDateError(value, line=line)
    try:
        return date.fromisoformat(s)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(s).date()
    except ValueError:
        pass
    # Reduced precision and ordinal forms: YYYY, YYYY-MM, YYYY-DDD, YYYYDDD.
    for fmt, pattern in _REDUCED_FORMS:
        if pattern.fullmatch(s):
            try:
                parsed = datetime.strptime(s, fmt).date()
            except ValueError as exc:
                raise InvalidDateError(value, line=line) from exc
            # strptime rolls day 366 of a common year into January.
            if parsed.year != int(s[:4]):
                raise InvalidDateError(value, line=line)
            return parsed
    raise InvalidDateError(value, line=line)


def parse_amount(value: str | int | float | Decimal, *, line: int | None = None) -> Decimal:
    """Parse a finite decimal amount, keeping its sign.

    NaN and infinities are rejected: they would poison every balance that
    includes them.
    """

    if isinstance(value, bool):
        raise InvalidAmountError(value, line=line)
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, int):
        d = Decimal(value)
    elif isinstance(value, float):
        # Go through repr so 0.1 stays 0.1 rather than its binary expansion.
        d = Decimal(repr(value))
    elif isinstance(value, str):
        s = value.strip()
        # Decimal() also takes digit-group underscores ("1_000"); plain decimals only.
        if not s or "_" in s:
            raise InvalidAmountError(value, line=line)
        try:
            d = Decimal(s)
        except InvalidOperation as exc:
            raise InvalidAmountError(value, line=line) from exc
    else:
        raise InvalidAmountError(value, line=line)

    if not d.is_finite():
        raise InvalidAmountError(value, line=line)
    return d


__all__ = ["parse_amount", "parse_iso_date"]
