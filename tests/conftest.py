import pytest

KICAD_DRILL = """M48
; DRILL file {KiCad 7.0.8} date 2024-03-02T11:20:04
; FORMAT={-:-/ absolute / metric / decimal}
; #@! TF.CreationDate,2024-03-02T11:20:04
; #@! TF.GenerationSoftware,Kicad,Pcbnew,7.0.8
; #@! TF.FileFunction,Plated,1,2,PTH
FMAT,2
METRIC
; #@! TA.AperFunction,Plated,PTH,ComponentDrill
T1C0.800
; #@! TA.AperFunction,Plated,PTH,ComponentDrill
T2C1.000
%
G90
G05
T1
X120.65Y-80.01
X123.19Y-80.01
T2
X130.0Y-75.0
T0
M30
"""


@pytest.fixture
def kicad_drill():
    return KICAD_DRILL


@pytest.fixture
def drill_file(tmp_path, kicad_drill):
    path = tmp_path / "board-PTH.drl"
    path.write_text(kicad_drill, encoding="utf-8")
    return path
