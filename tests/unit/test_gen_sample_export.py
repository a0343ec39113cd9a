from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest

from manroland_parser.services.parser import parse_file, parse_rows

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "gen_sample_export.py"


@pytest.fixture(scope="module")
def gen():
    spec = importlib.util.spec_from_file_location("gen_sample_export", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    assert spec and spec.loader
    spec.loader.exec_module(module)
    return module


def test_generated_rows_parse(gen, dictionary):
    rows = gen.generate_rows(dictionary, measurements=2, zones=3)
    result = parse_rows(rows, filename="R508_sample.csv", dictionary=dictionary)
    assert result.stats.primary_rows == 2 * 3 * 4
    assert result.stats.secondary_rows == 2 * 3
    assert result.stats.secondary_records == 2 * 3 * 3
    assert result.stats.corrected_rows == 0
    assert len(result.values) == 24 + 18
    assert result.meta["machine"] == "R508"
    assert result.meta["paperType"] == "4"


def test_generated_old_tonval_export(gen, dictionary, tmp_path: Path):
    out = tmp_path / "R710_old.csv"
    assert gen.main([str(out), "--old-tonval", "--measurements", "1", "--zones", "2"]) == 0
    result = parse_file(out, dictionary=dictionary)
    primary = [r for r in result.values if r["color"] in ("cyn", "mgt", "ylo", "blk")]
    assert len(primary) == 8
    for row in primary:
        assert row["tonVal40"]
        assert "tonVal20" not in row and "tonVal50" not in row
    assert result.stats.corrected_rows == 8
    assert result.meta["printer"] == "Gröger"


def test_rejects_non_positive_sizes(gen, tmp_path: Path):
    assert gen.main([str(tmp_path / "x.csv"), "--zones", "0"]) == 1
