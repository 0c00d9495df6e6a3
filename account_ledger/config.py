"""Runtime settings for CSV ingestion.

Settings come from the environment, optionally seeded from a ``.env`` file
found from the current working directory (``python-dotenv``). Values already
present in the environment win over the file.
"""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from .logging_setup import LOG_LEVEL_ENV

ENCODING_ENV = "ACCOUNT_LEDGER_ENCODING"
DELIMITER_ENV = "ACCOUNT_LEDGER_DELIMITER"


@dataclass(frozen=True, slots=True)
class LedgerSettings:
    """How raw CSV input is decoded and split.

    Attributes
    ----------
    encoding:
        Codec used to decode byte sources (files, ``bytes``, binary streams).
    delimiter:
        Single-character field separator.
    log_level:
        Optional level name handed to :func:`configure_logging` by hosts.
    """

    encoding: str = "utf-8"
    delimiter: str = ","
    log_level: str | None = None

    def __post_init__(self) -> None:
        if len(self.delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got {self.delimiter!r}")
        if self.delimiter in ('"', "\r", "\n"):
            raise ValueError(
                f"delimiter {self.delimiter!r} collides with CSV quoting or line breaks"
            )
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            raise ValueError(f"unknown encoding: {self.encoding!r}") from exc


def load_settings(*, dotenv: bool = True) -> LedgerSettings:
    """Build :class:`LedgerSettings` from the environment (and ``.env``)."""

    if dotenv:
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path=dotenv_path, override=False)

    defaults = LedgerSettings()
    return LedgerSettings(
        encoding=os.getenv(ENCODING_ENV) or defaults.encoding,
        delimiter=os.getenv(DELIMITER_ENV) or defaults.delimiter,
        log_level=os.getenv(LOG_LEVEL_ENV) or None,
    )


__all__ = ["LedgerSettings", "load_settings"]
