from __future__ import annotations

from collections.abc import Sequence
from typing import Any

"""Row classification and header mapping.

A manroland export has no explicit row-type column. The disposition of every
raw row is decided from its first two cells only:

    Raster-Percent :, ...        -> skipped (raster legend)
    <anything>, GB, ...          -> skipped (gray balance patch)
    Protocolled Measuring No,... -> header row
    <measuring no>, T, ...       -> secondary (overprint) color row
"""

__all__ = [
    "RASTER_MARKER",
    "GRAY_BALANCE_MARKER",
    "HEADER_MARKER",
    "SECONDARY_COLOR_MARKER",
    "should_skip",
    "is_header_row",
    "is_secondary_color_row",
    "map_to_headers",
]

RASTER_MARKER = "Raster-Percent :"
GRAY_BALANCE_MARKER = "GB"
HEADER_MARKER = "Protocolled Measuring No"
SECONDARY_COLOR_MARKER = "T"


def _check_row(row: Any, name: str = "row") -> None:
    if not isinstance(row, (list, tuple)):
        raise TypeError(f"{name} should be a list, but is {type(row).__name__}")


def _cell(row: Sequence[Any], index: int) -> Any:
    return row[index] if len(row) > index else None


def should_skip(row: Sequence[Any]) -> bool:
    _check_row(row)
    return _cell(row, 0) == RASTER_MARKER or _cell(row, 1) == GRAY_BALANCE_MARKER


def is_header_row(row: Sequence[Any]) -> bool:
    _check_row(row)
    return _cell(row, 0) == HEADER_MARKER


def is_secondary_color_row(row: Sequence[Any]) -> bool:
    """Secondary color rows carry a literal upper-case ``T`` in the color column."""
    _check_row(row)
    return _cell(row, 1) == SECONDARY_COLOR_MARKER


def map_to_headers(row: Sequence[Any], headers: Sequence[str]) -> dict[str, Any]:
    """Map positional cells to header names.

    Cells beyond the last header are dropped; headers beyond the last cell get
    no entry. Neither argument is modified.
    """
    _check_row(row)
    _check_row(headers, "headers")
    return {header: value for header, value in zip(headers, row)}
