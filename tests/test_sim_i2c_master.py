# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_sim_i2c_master.py

"""Build the reference RTL and run the i2c_master bench end to end.

Skipped unless Icarus or Verilator is on PATH.
"""

from __future__ import annotations

import shutil

import pytest
from cocotb_tools.runner import get_results

from i2cbench.tools import dv

SIMULATORS = {"icarus": "iverilog", "verilator": "verilator"}
AVAILABLE = [sim for sim, exe in SIMULATORS.items() if shutil.which(exe)]

pytestmark = pytest.mark.skipif(not AVAILABLE, reason="no HDL simulator on PATH")


@pytest.fixture
def run(tmp_path):
    bench = dv.BenchRun(sim=AVAILABLE[0] if AVAILABLE else "icarus", outdir=tmp_path)
    dv.run_build(bench)
    return bench


def test_all_i2c_master_tests_pass(run):
    num_tests, num_failed = get_results(dv.run_test(run, 1234))
    assert num_tests == 4
    assert num_failed == 0


def test_stretch_with_short_hold(tmp_path):
    bench = dv.BenchRun(
        sim=AVAILABLE[0] if AVAILABLE else "icarus",
        outdir=tmp_path,
        testcase="I2cMasterStretchTest",
        plusargs=("+STRETCH_HOLD_TICKS=40",),
    )
    dv.run_build(bench)
    assert get_results(dv.run_test(bench, 7)) == (1, 0)


def test_main_reports_pass(run, capsys):
    rc = dv.main([f"--outdir={run.outdir}", f"--sim={run.sim}", "--cmd=test"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "PASS" in out
    assert "(4/4)" in out
