from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..models.parse_result import ParseResult

"""Tabular export of parsed measurement values.

Primary and secondary color records have different key sets; the frame holds
the union of all columns in first-seen order, missing cells are NaN.
"""

__all__ = [
    "values_frame",
    "write_values_csv",
]


def values_frame(result: ParseResult) -> pd.DataFrame:
    columns: list[str] = []
    seen: set[str] = set()
    for record in result.values:
        for key in record:
            if key not in seen:
                seen.add(key)
                columns.append(key)
    return pd.DataFrame.from_records(result.values, columns=columns)


def write_values_csv(result: ParseResult, path: Path | str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    values_frame(result).to_csv(path, index=False, encoding="utf-8")
    return path
