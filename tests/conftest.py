# Shared pytest fixtures: small synthetic manroland exports
from __future__ import annotations
import tempfile
from pathlib import Path
from typing import Callable

import pytest

from manroland_parser.config.loader import ImportDictionary, default_dictionary

HEADER = (
    "Protocolled Measuring No,ColorName,Printing Unit,Zone No,Measuring Unit,"
    "Density - Solid Tone,Tone Value 20%,Tone Value 40%,Tone Value 50%,Tone Value 80%,"
    "L-Value T(C+M) - Solid Tone,a-Value T(C+M) - Solid Tone,b-Value T(C+M) - Solid Tone,"
    "L-Value T(C+Y) - Solid Tone,a-Value T(C+Y) - Solid Tone,b-Value T(C+Y) - Solid Tone,"
    "L-Value T(M+Y) - Solid Tone,a-Value T(M+Y) - Solid Tone,b-Value T(M+Y) - Solid Tone"
)

META_BLOCK = """Job No :,15-1923
Job Name :,Blätter T2
Customer :,marung+bähr Werbeagentur
Customer No :,5048035
Printer :,Gröger
Paper Type :,4 (matt coated)
Paper Name :,FSC BVS matt
Paper ID :,30010070bvsm
Grammage :,300
Sheet :,1 -
Screening :,screening
Ink :,ink
"""

# 9 primary rows (8 process colors + paper white), 1 gray balance row,
# 2 overprint rows: zone 1 yields CM/CY/MY, zone 2 drops CY (a-value 0)
NEW_EXPORT = META_BLOCK + "Raster-Percent :,20,40,80\n" + HEADER + "\n" + """1,CYN,1,1,1,1.45,18.2,21.5,22.1,14.0,,,,,,,,,
1,MGT,2,1,1,1.38,17.9,20.8,21.7,13.2,,,,,,,,,
1,YLO,3,1,1,1.02,15.1,19.4,20.3,12.8,,,,,,,,,
1,BLK,4,1,1,1.80,19.5,22.7,23.4,15.1,,,,,,,,,
1,GB,,1,,,,,,,,,,,,,,,
1,T,,1,,,,,,,49.5,-34.1,-46.2,51.3,-60.4,25.7,47.9,66.8,44.0
1,PaperWhite,,1,1,0.05,,,,,,,,,,,,,
1,CYN,1,2,1,1.47,18.0,21.3,22.0,13.9,,,,,,,,,
1,MGT,2,2,1,1.40,17.7,20.9,21.5,13.0,,,,,,,,,
1,YLO,3,2,1,1.00,15.3,19.1,20.0,12.5,,,,,,,,,
1,BLK,4,2,1,1.78,19.2,22.4,23.0,15.3,,,,,,,,,
1,T,,2,,,,,,,49.1,-33.8,-46.0,51.0,0,25.1,47.5,66.1,43.8
"""

OLD_HEADER = (
    "Protocolled Measuring No,ColorName,Printing Unit,Zone No,Measuring Unit,"
    "Density - Solid Tone,Tone Value 20%,Tone Value 50%,Tone Value 80%"
)

# old firmware: no 40% column, tone values at 20% and 50%
OLD_EXPORT = META_BLOCK + OLD_HEADER + "\n" + """1,CYN,1,1,1,1.45,9.8,18.4,14.0
1,MGT,2,1,1,1.38,9.5,17.6,13.2
1,YLO,3,1,1,1.02,8.1,16.2,12.8
1,BLK,4,1,1,1.80,10.4,19.3,15.1
"""

ALL_SKIP_EXPORT = META_BLOCK + "Raster-Percent :,20,40,80\n1,GB,,1\n"

HEADERLESS_EXPORT = META_BLOCK + "1,CYN,1,1,1,1.45\n1,MGT,2,1,1,1.38\n"


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def dictionary() -> ImportDictionary:
    return default_dictionary()


@pytest.fixture()
def write_export(temp_workdir: Path) -> Callable[[str, str], Path]:
    """Write export text latin-1 encoded (as the press console does) into data/."""
    def _write(name: str, text: str) -> Path:
        path = temp_workdir / "data" / name
        path.write_bytes(text.encode("latin-1"))
        return path
    return _write


@pytest.fixture()
def new_export(write_export) -> Path:
    return write_export("R508_15-12-10_15-1923(Nass)__4_- Blätter T2(R505).csv", NEW_EXPORT)


@pytest.fixture()
def old_export(write_export) -> Path:
    return write_export("R710DD_12-08-21_22404_1.1 AGCO top.csv", OLD_EXPORT)
