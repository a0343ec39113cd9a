from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from manroland_parser.config.loader import ConfigError, ImportDictionary, load_dictionary
from manroland_parser.logging.init import SUMMARY_LEVEL, set_debug, setup_logging
from manroland_parser.services.export import write_values_csv
from manroland_parser.services.parser import parse, parse_file
from manroland_parser.services.summary import render_summary_line

"""CLI entrypoint.

    manroland-parser [PATH | -] [--dictionary FILE] [--values-csv FILE] [--debug]

Reads the export from PATH, or from stdin when PATH is omitted or ``-``, and
prints the parse result as JSON on stdout. Log lines go to stderr.

Dictionary resolution: ``--dictionary``, then ``MANROLAND_DICTIONARY`` (a
``.env`` file in the working directory is loaded first and wins over the
process environment), then the bundled dictionary.

Parse failures (InvalidInputError, unreadable file, ...) are not caught: the
process exits non-zero with the traceback.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

DICTIONARY_ENV = "MANROLAND_DICTIONARY"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; a broken file only produces a warning."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}", file=sys.stderr)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="manroland-parser", description="Parse and normalize manroland csv exports")
    p.add_argument("path", nargs="?", default=None, help="CSV export to parse ('-' or omitted: stdin)")
    p.add_argument("--dictionary", default=None, help="Field dictionary (YAML or JSON)")
    p.add_argument("--values-csv", default=None, help="Also write the values table to this CSV file")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _resolve_dictionary(option: str | None) -> ImportDictionary:
    path = option or os.getenv(DICTIONARY_ENV) or None
    return load_dictionary(path)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] must not pick up pytest's own argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)
    try:
        dictionary = _resolve_dictionary(args.dictionary)
    except ConfigError as e:
        logger.error(f"dictionary: {e}")
        return EXIT_FATAL

    if args.path is None or args.path == "-":
        result = parse(sys.stdin.buffer, dictionary=dictionary)
    else:
        result = parse_file(args.path, dictionary=dictionary)

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))

    if args.values_csv:
        out = write_values_csv(result, args.values_csv)
        logger.info(f"values written to {out}")

    logger.log(SUMMARY_LEVEL, render_summary_line(args.path, result))
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
