"""Parse and normalize manroland press console CSV exports."""

from .config.loader import ConfigError, ImportDictionary, default_dictionary, load_dictionary
from .models.parse_result import ParseResult, ParseStats
from .services.normalize import (
    MalformedMetadataError,
    correct_old_tonval,
    enhance_secondary_color_row,
    normalize_data_row,
    normalize_meta,
    normalize_secondary_color_row,
)
from .services.parser import InvalidInputError, RowParser, get_machine_name, parse, parse_file, parse_rows
from .services.rows import is_header_row, is_secondary_color_row, map_to_headers, should_skip

__version__ = "1.0.0"

__all__ = [
    "ConfigError",
    "ImportDictionary",
    "InvalidInputError",
    "MalformedMetadataError",
    "ParseResult",
    "ParseStats",
    "RowParser",
    "correct_old_tonval",
    "default_dictionary",
    "enhance_secondary_color_row",
    "get_machine_name",
    "is_header_row",
    "is_secondary_color_row",
    "load_dictionary",
    "map_to_headers",
    "normalize_data_row",
    "normalize_meta",
    "normalize_secondary_color_row",
    "parse",
    "parse_file",
    "parse_rows",
    "should_skip",
]
