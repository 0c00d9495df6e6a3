"""Pytest configuration for test isolation.

Settings are read from ``ACCOUNT_LEDGER_*`` environment variables and from a
``.env`` file discovered from the working directory. Each test runs with those
variables cleared and from its own temporary directory so neither the
developer's shell nor a stray ``.env`` leaks into assertions.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from account_ledger import logging_setup

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("ACCOUNT_LEDGER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logging_setup._reset_for_tests()


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR
