from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Iterator
from typing import IO, Any

"""CSV reader for manroland exports.

The press console writes its exports in a single-byte legacy encoding
(latin-1). Every byte decodes, so decoding itself never fails; the text is
then tokenized with the stdlib csv module. pandas is not used here: metadata lines carry two cells while data
lines carry dozens, which its tokenizer rejects.

Rows are yielded lazily, one at a time, with empty cells converted to None.
Blank lines are dropped.
"""

__all__ = [
    "LEGACY_ENCODING",
    "decode_lines",
    "iter_rows",
]

LEGACY_ENCODING = "latin-1"


def decode_lines(stream: IO[bytes] | Iterable[bytes]) -> Iterator[str]:
    """Decode a binary stream (or iterable of byte chunks) into text lines."""
    if isinstance(stream, io.IOBase) or hasattr(stream, "readable"):
        text = io.TextIOWrapper(stream, encoding=LEGACY_ENCODING, newline="")  # type: ignore[arg-type]
        try:
            yield from text
        finally:
            # do not close the caller's stream
            text.detach()
        return
    for chunk in stream:
        yield from chunk.decode(LEGACY_ENCODING).splitlines(keepends=True)


def _empty_to_none(row: list[str]) -> list[Any]:
    return [cell if cell != "" else None for cell in row]


def iter_rows(stream: IO[bytes] | Iterable[bytes], delimiter: str = ",") -> Iterator[list[Any]]:
    """Yield tokenized rows from a legacy-encoded CSV stream.

    Parameters
    ----------
    stream: binary file object, or an iterable of byte lines
    delimiter: field separator (the device writes commas)
    """
    reader = csv.reader(decode_lines(stream), delimiter=delimiter)
    for row in reader:
        # blank lines carry no information for any section
        if not any(row):
            continue
        yield _empty_to_none(row)
