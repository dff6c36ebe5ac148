import json
import subprocess
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
SCENARIO = ROOT / "newton_irr" / "inputs" / "release_case.yaml"


def test_release_case_matches_reference():
    npf = pytest.importorskip("numpy_financial")
    assert SCENARIO.exists(), f"Missing scenario {SCENARIO}"

    # Run via CLI to exercise the public surface
    cmd = [sys.executable, "-m", "newton_irr", "--config", str(SCENARIO), "--format", "json"]
    out = subprocess.run(cmd, check=True, cwd=ROOT, capture_output=True, text=True).stdout
    got = json.loads(out)

    assert got["converged"] is True
    want = float(npf.irr(got["cashflows"]))
    diff = abs(float(got["irr"]) - want)
    assert diff < 1e-6, f"irr drifted: got={got['irr']} want={want} (|Δ|={diff})"
