#!/usr/bin/env python3
"""Synthetic manroland export generator.

Writes a latin-1 encoded CSV shaped like a press console export:
- metadata block (``label :, value`` lines)
- raster legend line (skipped by the parser)
- header row starting with "Protocolled Measuring No"
- per measurement and zone: one row per primary color, one gray balance row
  (skipped) and one "T" row holding the overprint L/a/b values

``--old-tonval`` drops the 40% tone value columns and fills the 20%/50%
columns instead, like exports of the old firmware.
"""
from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path
from typing import Any

import numpy as np

from manroland_parser.config.loader import ImportDictionary, load_dictionary
from manroland_parser.csvio.reader import LEGACY_ENCODING
from manroland_parser.services.rows import GRAY_BALANCE_MARKER, RASTER_MARKER, SECONDARY_COLOR_MARKER

PRIMARY_COLORS = ["CYN", "MGT", "YLO", "BLK"]

SAMPLE_META = {
    "jobNo": "15-1923",
    "jobName": "Blätter T2",
    "customer": "marung+bähr Werbeagentur",
    "customerID": "5048035",
    "printer": "Gröger",
    "paperType": "4 (matt coated)",
    "paperName": "FSC BVS matt",
    "paperID": "30010070bvsm",
    "grammage": "300",
    "sheet": "1 - ",
    "screening": "screening",
    "ink": "ink",
}

OLD_TONVAL_FIELDS = {"tonVal40", "act_L_40", "act_a_40", "act_b_40"}


def header_columns(dictionary: ImportDictionary, old_tonval: bool = False) -> list[str]:
    source = dictionary.source
    columns = [
        entry[source]
        for key, entry in dictionary.data.items()
        if not (old_tonval and key in OLD_TONVAL_FIELDS)
    ]
    for color in dictionary.secondary.values():
        columns.extend(color[c][source] for c in ("act_L", "act_a", "act_b"))
    return columns


def generate_rows(
    dictionary: ImportDictionary,
    measurements: int = 2,
    zones: int = 10,
    old_tonval: bool = False,
    seed: int = 42,
) -> list[list[Any]]:
    """Generate the rows of one export.

    Args:
        dictionary: field dictionary providing the column names
        measurements: number of measuring runs
        zones: ink zones per run
        old_tonval: emit the old firmware tone value schema
        seed: random seed for reproducible data

    Returns:
        Rows as lists of cells; empty cells are ""
    """
    rng = np.random.default_rng(seed)
    source = dictionary.source
    rows: list[list[Any]] = []

    for key, entry in dictionary.meta.items():
        rows.append([entry[source], SAMPLE_META.get(key, "")])
    rows.append([RASTER_MARKER, "20", "40", "80"])

    headers = header_columns(dictionary, old_tonval)
    rows.append(headers)
    width = len(headers)
    index = {name: i for i, name in enumerate(headers)}

    def column(key: str) -> int | None:
        entry = dictionary.data.get(key)
        return index.get(entry[source]) if entry is not None else None

    for measuring_no in range(1, measurements + 1):
        for zone in range(1, zones + 1):
            for unit, color in enumerate(PRIMARY_COLORS, start=1):
                row: list[Any] = [""] * width
                row[0] = str(measuring_no)
                row[1] = color
                for key, value in (("pUnitNo", unit), ("zoneNo", zone), ("measuringUnit", 1)):
                    i = column(key)
                    if i is not None:
                        row[i] = str(value)
                for key in ("density", "act_L", "act_a", "act_b", "tonVal80"):
                    i = column(key)
                    if i is not None:
                        row[i] = f"{rng.uniform(0.5, 80):.2f}"
                tone_keys = ("tonVal20", "tonVal50") if old_tonval else ("tonVal20", "tonVal40", "tonVal50")
                for key in tone_keys:
                    i = column(key)
                    if i is not None:
                        row[i] = f"{rng.uniform(5, 25):.1f}"
                rows.append(row)

            gray = [""] * width
            gray[0] = str(measuring_no)
            gray[1] = GRAY_BALANCE_MARKER
            rows.append(gray)

            overprint = [""] * width
            overprint[0] = str(measuring_no)
            overprint[1] = SECONDARY_COLOR_MARKER
            i = column("zoneNo")
            if i is not None:
                overprint[i] = str(zone)
            for color in dictionary.secondary.values():
                for c in ("act_L", "act_a", "act_b"):
                    overprint[index[color[c][source]]] = f"{rng.uniform(1, 60):.2f}"
            rows.append(overprint)

    return rows


def write_export(output_path: Path, rows: list[list[Any]]) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding=LEGACY_ENCODING, newline="") as f:
        csv.writer(f, lineterminator="\r\n").writerows(rows)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic manroland CSV export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s R508_sample.csv
  %(prog)s R710_old.csv --old-tonval --zones 32 --measurements 5
        """,
    )
    parser.add_argument("output", type=Path, help="Output CSV path (include R### to set the machine)")
    parser.add_argument("--measurements", type=int, default=2, help="Measuring runs (default: 2)")
    parser.add_argument("--zones", type=int, default=10, help="Ink zones per run (default: 10)")
    parser.add_argument("--old-tonval", action="store_true", help="Use the old 20%%/50%% tone value schema")
    parser.add_argument("--dictionary", type=Path, default=None, help="Field dictionary (default: bundled)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args(argv)

    if args.measurements <= 0 or args.zones <= 0:
        print("Error: --measurements and --zones must be positive", file=sys.stderr)
        return 1

    dictionary = load_dictionary(args.dictionary)
    rows = generate_rows(dictionary, args.measurements, args.zones, args.old_tonval, args.seed)
    write_export(args.output, rows)

    print(f"Created export: {args.output}")
    print(f"  Primary rows: {args.measurements * args.zones * len(PRIMARY_COLORS)}")
    print(f"  Overprint rows: {args.measurements * args.zones}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
