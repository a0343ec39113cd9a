from __future__ import annotations

import logging
import re
import time
from collections.abc import Iterable
from pathlib import Path
from typing import IO, Any

from ..config.loader import ImportDictionary, default_dictionary
from ..csvio.reader import iter_rows
from ..models.parse_result import ParseResult, ParseStats
from .normalize import (
    correct_old_tonval,
    enhance_secondary_color_row,
    normalize_data_row,
    normalize_meta,
    normalize_secondary_color_row,
)
from .rows import is_header_row, is_secondary_color_row, map_to_headers, should_skip

"""Stream driver for manroland exports.

An export is read top to bottom in a single pass:

1. metadata block: ``label, value`` lines, up to the header row
2. the header row (first cell "Protocolled Measuring No")
3. data rows: primary colors, and "T" rows holding the overprint colors

RowParser holds the state of one parse; ``parse`` and friends create a fresh
RowParser per call, so concurrent parses share nothing but the (frozen)
dictionary.
"""

__all__ = [
    "MAKER",
    "InvalidInputError",
    "RowParser",
    "get_machine_name",
    "parse",
    "parse_file",
    "parse_rows",
]

logger = logging.getLogger(__name__)

MAKER = "manroland"

_MACHINE_RE = re.compile(r"R\d{3}", re.IGNORECASE)


class InvalidInputError(Exception):
    """Raised when a stream holds no usable data rows."""

    def __init__(self, message: str = "InvalidInput") -> None:
        super().__init__(message)


def get_machine_name(filename: str | None) -> str:
    """Parse the press name (``R`` + three digits) from a file name."""
    if not filename:
        return ""
    match = _MACHINE_RE.search(filename)
    return match.group(0) if match else ""


class RowParser:
    """Single-use state machine turning tokenized rows into a ParseResult.

    States are ``PRE_HEADER`` (collecting metadata) and ``IN_DATA``; the switch
    happens once, on the header row. The machine is matched against the base
    name of ``filename`` only, never against its directories.
    """

    def __init__(self, dictionary: ImportDictionary | None = None, filename: str | None = None) -> None:
        self.dictionary = dictionary if dictionary is not None else default_dictionary()
        self.filename = filename
        self.machine = get_machine_name(Path(filename).name if filename else None)
        self.meta: dict[Any, Any] = {}
        self.values: list[dict[str, Any]] = []
        self.headers: list[Any] = []
        self.is_data = False
        self._counts = {
            "meta_rows": 0,
            "skipped_rows": 0,
            "primary_rows": 0,
            "secondary_rows": 0,
            "secondary_records": 0,
            "corrected_rows": 0,
        }
        self._start = time.perf_counter()

    @property
    def state(self) -> str:
        return "IN_DATA" if self.is_data else "PRE_HEADER"

    def feed(self, row: list[Any]) -> None:
        if should_skip(row):
            self._counts["skipped_rows"] += 1
            return

        if self.is_data:
            self._feed_data(row)
            return

        if is_header_row(row):
            logger.debug("found headers")
            self.headers = self.headers + list(row)
            self.is_data = True
            return

        self.meta[row[0] if row else None] = row[1] if len(row) > 1 else None
        self._counts["meta_rows"] += 1

    def _feed_data(self, row: list[Any]) -> None:
        source = self.dictionary.source
        mapped = map_to_headers(row, self.headers)
        projected = normalize_data_row(mapped, self.dictionary.data, source)
        normalized = correct_old_tonval(projected)
        if "tonVal40" not in projected and "tonVal40" in normalized:
            self._counts["corrected_rows"] += 1

        if is_secondary_color_row(row):
            self._counts["secondary_rows"] += 1
            for record in normalize_secondary_color_row(mapped, self.dictionary.secondary, source):
                self.values.append(enhance_secondary_color_row(record, normalized))
                self._counts["secondary_records"] += 1
        else:
            self.values.append(normalized)
            self._counts["primary_rows"] += 1

    def finish(self) -> ParseResult:
        """Build the result once the stream is exhausted.

        Raises:
            InvalidInputError: if no data rows were collected
            MalformedMetadataError: if the paper type cannot be parsed
        """
        if not self.values:
            raise InvalidInputError()

        meta = {"maker": MAKER, "machine": self.machine}
        meta.update(normalize_meta(self.meta, self.dictionary.meta, self.dictionary.source))

        stats = ParseStats(elapsed_seconds=time.perf_counter() - self._start, **self._counts)
        logger.debug(f"parsed {meta.get('jobNo')} with {len(self.values)} rows")
        return ParseResult(meta=meta, values=self.values, stats=stats)


def parse_rows(
    rows: Iterable[list[Any]], filename: str | None = None, dictionary: ImportDictionary | None = None
) -> ParseResult:
    """Drive already tokenized rows through a fresh RowParser."""
    parser = RowParser(dictionary=dictionary, filename=filename)
    for row in rows:
        parser.feed(row)
    return parser.finish()


def parse(
    stream: IO[bytes] | Iterable[bytes],
    filename: str | None = None,
    dictionary: ImportDictionary | None = None,
) -> ParseResult:
    """Parse a legacy-encoded manroland CSV export.

    Args:
        stream: binary file object (or iterable of byte lines)
        filename: name used to derive the machine; defaults to ``stream.name``
        dictionary: field dictionary; defaults to the bundled one

    Returns:
        ParseResult with normalized ``meta`` and ``values``

    Raises:
        InvalidInputError: the export holds no data rows
        MalformedMetadataError: the paper type cannot be parsed
        OSError / csv.Error: propagated from reading and tokenizing
    """
    if filename is None:
        name = getattr(stream, "name", None)
        filename = name if isinstance(name, str) else None
    if filename:
        logger.debug(Path(filename).name)
    return parse_rows(iter_rows(stream), filename=filename, dictionary=dictionary)


def parse_file(path: Path | str, dictionary: ImportDictionary | None = None) -> ParseResult:
    path = Path(path)
    with path.open("rb") as f:
        return parse(f, filename=str(path), dictionary=dictionary)
