"""Domain models for the manroland parser."""

from .parse_result import ParseResult, ParseStats

__all__ = [
    "ParseResult",
    "ParseStats",
]
