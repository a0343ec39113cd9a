from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from ..config.loader import SOURCE_KEY

"""Field normalization against the import dictionary.

Every normalizer is a closed-world projection: the output carries only the
logical keys declared in the dictionary section, in declaration order, no
matter what else the input holds.

An absent source column and an empty cell are different things. Metadata
fields always appear (None when the label is missing from the block). Data
fields whose column is missing from the header row are left out of the row,
while an empty cell in a present column comes out as None.
"""

__all__ = [
    "MalformedMetadataError",
    "is_number",
    "to_number",
    "normalize_meta",
    "normalize_data_row",
    "correct_old_tonval",
    "normalize_secondary_color_row",
    "enhance_secondary_color_row",
]

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_RE = re.compile(r"[+-]?\d+")
_PAPER_TYPE_RE = re.compile(r"\d[F]?", re.IGNORECASE)

# fields copied from the primary row onto each expanded secondary color record
SIBLING_FIELDS = ("pUnitNo", "measuringNo", "zoneNo")


class MalformedMetadataError(ValueError):
    """Raised when a metadata value lacks the structure its field requires."""


def is_number(value: Any) -> bool:
    """Return True for real numbers and for strings spelling a finite decimal number.

    Surrounding whitespace is ignored. ``"Infinity"``, ``"NaN"``, hex literals
    and empty strings are not numbers.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return value == value and value not in (float("inf"), float("-inf"))
    if isinstance(value, str):
        return _NUMBER_RE.fullmatch(value.strip()) is not None
    return False


def to_number(value: Any) -> Any:
    if not is_number(value):
        return value
    if not isinstance(value, str):
        return value
    text = value.strip()
    if _INTEGER_RE.fullmatch(text):
        return int(text)
    return float(text)


def _check_mapping(value: Any, name: str) -> None:
    if not isinstance(value, Mapping):
        raise TypeError(f'"{name}" should be a mapping, but is {type(value).__name__}')


def normalize_meta(
    raw: Mapping[str, Any], section: Mapping[str, Mapping[str, str]], source: str = SOURCE_KEY
) -> dict[str, Any]:
    """Normalize the metadata block according to the ``meta`` dictionary section.

    Args:
        raw: metadata accumulator (block label -> value)
        section: logical field -> source column entry
        source: key of the column name inside each entry

    Returns:
        New dict holding exactly the section's logical fields. ``paperType``
        is reduced to its leading digit (plus an optional ``F``), ``sheet`` has
        its hyphens removed and is stripped.

    Raises:
        TypeError: if ``raw`` or ``section`` is not a mapping
        MalformedMetadataError: if ``paperType`` holds no digit
    """
    _check_mapping(raw, "input")
    _check_mapping(section, "dict")

    output = {key: raw.get(section[key][source]) for key in section}

    paper_type = output.get("paperType")
    if isinstance(paper_type, str):
        match = _PAPER_TYPE_RE.search(paper_type)
        if match is None:
            raise MalformedMetadataError(f"unrecognized paper type: {paper_type!r}")
        output["paperType"] = match.group(0)

    sheet = output.get("sheet")
    if isinstance(sheet, str):
        output["sheet"] = sheet.replace("-", "").strip()

    logger.debug(f"normalized metadata for {output.get('jobNo')}")
    return output


def normalize_data_row(
    row: Mapping[str, Any], section: Mapping[str, Mapping[str, str]], source: str = SOURCE_KEY
) -> dict[str, Any]:
    """Project a header-mapped row onto the ``data`` section.

    Number-like values become numbers; the ``color`` value is lower-cased;
    everything else passes through untouched. Fields whose source column is
    not in ``row`` are omitted.
    """
    _check_mapping(row, "row")
    _check_mapping(section, "dict")

    output: dict[str, Any] = {}
    for key in section:
        column = section[key][source]
        if column not in row:
            continue
        value = row[column]
        if is_number(value):
            output[key] = to_number(value)
        elif key == "color" and isinstance(value, str):
            output[key] = value.lower()
        else:
            output[key] = value
    return output


def correct_old_tonval(row: Mapping[str, Any]) -> dict[str, Any]:
    """Rewrite rows of old color strips onto the 40% mid tone schema.

    Old firmware measured the tone value at 50% and 20% instead of 40%. The 50%
    reading moves to ``tonVal40``; ``tonVal50`` and ``tonVal20`` are dropped.

    Rows carrying a ``tonVal40`` field are returned unchanged, even when its
    value is None (new schema, empty 40% cell). Rows carrying neither
    ``tonVal40`` nor ``tonVal50`` are returned unchanged as well.
    """
    if "tonVal40" in row or "tonVal50" not in row:
        return dict(row)

    corrected = dict(row)
    corrected["tonVal40"] = corrected.pop("tonVal50")
    corrected.pop("tonVal20", None)
    logger.debug("old tonval row corrected")
    return corrected


def normalize_secondary_color_row(
    row: Mapping[str, Any],
    section: Mapping[str, Mapping[str, Mapping[str, str]]],
    source: str = SOURCE_KEY,
) -> list[dict[str, Any]]:
    """Split one secondary color row into one record per overprint color.

    Only complete readings survive: a record is dropped unless ``act_L``,
    ``act_a`` and ``act_b`` are all truthy, so a reading of exactly 0 counts
    as missing.
    """
    _check_mapping(row, "row")
    _check_mapping(section, "dict")

    records = []
    for color in section:
        columns = section[color]
        records.append({
            "colorName": color,
            "color": color.lower(),
            "act_L": to_number(row.get(columns["act_L"][source])),
            "act_a": to_number(row.get(columns["act_a"][source])),
            "act_b": to_number(row.get(columns["act_b"][source])),
        })
    return [r for r in records if r["act_L"] and r["act_a"] and r["act_b"]]


def enhance_secondary_color_row(record: Mapping[str, Any], primary: Mapping[str, Any]) -> dict[str, Any]:
    """Copy printing unit, measuring number and zone from the primary row."""
    enhanced = dict(record)
    for key in SIBLING_FIELDS:
        enhanced[key] = primary.get(key)
    return enhanced
