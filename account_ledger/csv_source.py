"""Turn a CSV source into an async stream of ``(line, fields)`` records.

Accepted sources:

- ``str``: the whole CSV text.
- ``bytes``/``bytearray``: the whole CSV content, decoded with the configured
  encoding.
- a file-like object with ``read`` (text or binary), consumed in chunks.
- an async iterable yielding ``str`` or ``bytes`` chunks.

Records follow RFC 4180 quoting via the stdlib :mod:`csv` module: a quoted
field may span physical lines, so lines are buffered until their quotes
balance. Each record is reported with the physical line it starts on.
"""

from __future__ import annotations

import asyncio
import codecs
import csv
import io
from collections.abc import AsyncIterable, AsyncIterator
from typing import IO, TypeAlias

from .errors import MalformedRowError, NoInputError

CsvSource: TypeAlias = str | bytes | bytearray | IO[str] | IO[bytes] | AsyncIterable[str | bytes]

_CHUNK_SIZE = 64 * 1024


def check_source(source: object) -> None:
    """Raise :class:`NoInputError` unless ``source`` is something we can read."""

    if source is None:
        raise NoInputError()
    if isinstance(source, (str, bytes, bytearray)):
        return
    if hasattr(source, "__aiter__") or callable(getattr(source, "read", None)):
        return
    raise NoInputError(f"Nothing to parse: unsupported source type {type(source).__name__}")


class _LineSplitter:
    """Incrementally split decoded text into lines, keeping line endings.

    A trailing ``\\r`` is held back until the next chunk shows whether it is
    half of a ``\\r\\n`` pair.
    """

    def __init__(self, encoding: str) -> None:
        self._encoding = encoding
        self._decoder = codecs.getincrementaldecoder(encoding)()
        self._pending = ""

    def _decode(self, data: bytes, *, final: bool = False) -> str:
        try:
            return self._decoder.decode(data, final=final)
        except UnicodeDecodeError as exc:
            raise MalformedRowError(f"input is not valid {self._encoding}: {exc.reason}") from exc

    def feed(self, chunk: str | bytes | bytearray) -> list[str]:
        if isinstance(chunk, (bytes, bytearray)):
            text = self._decode(bytes(chunk))
        elif isinstance(chunk, str):
            text = chunk
        else:
            raise MalformedRowError(
                f"stream yielded {type(chunk).__name__}, expected str or bytes"
            )
        buf = self._pending + text
        end = len(buf) - 1 if buf.endswith("\r") else len(buf)
        cut = max(buf.rfind("\n", 0, end), buf.rfind("\r", 0, end))
        if cut == -1:
            self._pending = buf
            return []
        complete, self._pending = buf[: cut + 1], buf[cut + 1 :]
        return _split(complete)

    def flush(self) -> list[str]:
        self._pending += self._decode(b"", final=True)
        rest, self._pending = self._pending, ""
        return _split(rest) if rest else []


def _split(text: str) -> list[str]:
    # newline="" splits on \n, \r and \r\n without translating them.
    return list(io.StringIO(text, newline=""))


async def _iter_chunks(source: CsvSource) -> AsyncIterator[str | bytes]:
    if isinstance(source, (str, bytes, bytearray)):
        yield source
        return
    if hasattr(source, "__aiter__"):
        async for chunk in source:  # type: ignore[union-attr]
            yield chunk
        return
    while True:
        chunk = source.read(_CHUNK_SIZE)  # type: ignore[union-attr]
        if not chunk:
            return
        yield chunk
        # Give other tasks a turn between blocking reads.
        await asyncio.sleep(0)


async def iter_lines(source: CsvSource, *, encoding: str = "utf-8") -> AsyncIterator[str]:
    """Yield physical lines (with their endings) from ``source``."""

    check_source(source)
    splitter = _LineSplitter(encoding)
    async for chunk in _iter_chunks(source):
        for line in splitter.feed(chunk):
            yield line
    for line in splitter.flush():
        yield line


async def iter_records(
    source: CsvSource,
    *,
    encoding: str = "utf-8",
    delimiter: str = ",",
) -> AsyncIterator[tuple[int, list[str]]]:
    """Yield ``(line, fields)`` for every non-blank CSV record in ``source``.

    ``line`` is the 1-based physical line the record starts on. Fields are
    returned raw (unstripped). Bad quoting raises :class:`MalformedRowError`.
    """

    lineno = 0
    start = 0
    buffered: list[str] = []
    quotes = 0
    async for line in iter_lines(source, encoding=encoding):
        lineno += 1
        if not buffered:
            start = lineno
        buffered.append(line)
        quotes += line.count('"')
        if quotes % 2:
            # Inside a quoted field that continues on the next line.
            continue
        record, buffered, quotes = buffered, [], 0
        fields = _read_record(record, delimiter=delimiter, line=start)
        if fields is not None:
            yield start, fields

    if buffered:
        raise MalformedRowError("unterminated quoted field at end of input", line=start)


def _read_record(lines: list[str], *, delimiter: str, line: int) -> list[str] | None:
    try:
        rows = list(csv.reader(lines, delimiter=delimiter, strict=True))
    except csv.Error as exc:
        raise MalformedRowError(f"invalid CSV: {exc}", line=line) from exc
    if len(rows) > 1:
        raise MalformedRowError("invalid CSV: record spans unexpected line breaks", line=line)
    if not rows or not rows[0]:
        return None
    fields = rows[0]
    if len(fields) == 1 and not fields[0].strip():
        return None
    return fields


__all__ = ["CsvSource", "check_source", "iter_lines", "iter_records"]
