from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Parse result models.

ParseResult is what a successful parse returns; ParseStats carries the row
counters the stream driver collects along the way (used for the SUMMARY line).
"""

__all__ = [
    "ParseStats",
    "ParseResult",
]


@dataclass(frozen=True)
class ParseStats:
    """Per-file row counters."""
    meta_rows: int = 0  # lines recorded into the metadata block
    skipped_rows: int = 0  # raster legend / gray balance lines
    primary_rows: int = 0  # primary color records appended
    secondary_rows: int = 0  # raw "T" lines seen
    secondary_records: int = 0  # overprint records emitted from those lines
    corrected_rows: int = 0  # old tone value rows rewritten
    elapsed_seconds: float = 0.0


@dataclass(frozen=True)
class ParseResult:
    """Normalized metadata plus the per-zone measurement records.

    ``values`` is never empty: a parse that yields no data rows raises
    InvalidInputError instead of returning a result.
    """
    meta: dict[str, Any]
    values: list[dict[str, Any]]
    stats: ParseStats = field(default_factory=ParseStats)

    def to_dict(self) -> dict[str, Any]:
        return {"meta": dict(self.meta), "values": [dict(v) for v in self.values]}
