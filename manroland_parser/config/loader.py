from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Import dictionary loader.

Responsibilities:
- Load the field dictionary (YAML, or JSON for legacy `import-dictionary.json` copies)
- Validate it against dictionary_schema.json
- Freeze every section so one instance can be shared by any number of parses
- Precompute the logical key order of each section
"""

__all__ = [
    "ConfigError",
    "ImportDictionary",
    "DEFAULT_DICTIONARY_PATH",
    "SCHEMA_PATH",
    "load_dictionary",
    "default_dictionary",
    "freeze",
]

_config_dir = Path(__file__).parent
DEFAULT_DICTIONARY_PATH = _config_dir / "import_dictionary.yml"
SCHEMA_PATH = _config_dir / "dictionary_schema.json"

SOURCE_KEY = "manroland"

_default: ImportDictionary | None = None


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ImportDictionary:
    """Read-only field dictionary.

    Each section maps a logical field name to its source column entry
    (``{"manroland": "<column>"}``); ``secondary`` maps a derived color code to
    its ``act_L``/``act_a``/``act_b`` column entries.
    """
    meta: Mapping[str, Mapping[str, str]]
    data: Mapping[str, Mapping[str, str]]
    secondary: Mapping[str, Mapping[str, Mapping[str, str]]]
    meta_keys: tuple[str, ...]
    data_keys: tuple[str, ...]
    secondary_keys: tuple[str, ...]
    source: str = SOURCE_KEY
    version: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], source: str = SOURCE_KEY) -> ImportDictionary:
        meta = freeze(data["meta"])
        rows = freeze(data["data"])
        secondary = freeze(data["secondary"])
        return cls(
            meta=meta,
            data=rows,
            secondary=secondary,
            meta_keys=tuple(meta),
            data_keys=tuple(rows),
            secondary_keys=tuple(secondary),
            source=source,
            version=data.get("version"),
        )


def freeze(value: Any) -> Any:
    """Recursively turn dicts into MappingProxyType and lists into tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(freeze(v) for v in value)
    return value


def _validate_dictionary_schema(data: dict[str, Any]) -> None:
    """Validate dictionary data against the JSON schema.

    Raises:
        ConfigError: if the schema file is missing or unreadable, or if the
            dictionary does not satisfy it (missing section, entry without a
            ``manroland`` column, incomplete secondary color, ...).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"dictionary schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"dictionary validation failed: {e.message}") from e


def load_dictionary(path: Path | str | None = None) -> ImportDictionary:
    path = Path(path) if path is not None else DEFAULT_DICTIONARY_PATH
    if not path.exists():
        raise ConfigError(f"dictionary file not found: {path}")

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(f"invalid json: {e}") from e
    else:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid yaml: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"dictionary must be a mapping, got {type(data).__name__}")

    _validate_dictionary_schema(data)
    return ImportDictionary.from_mapping(data)


def default_dictionary() -> ImportDictionary:
    """Return the bundled dictionary, loading it on first use."""
    global _default
    if _default is None:
        _default = load_dictionary(DEFAULT_DICTIONARY_PATH)
    return _default
