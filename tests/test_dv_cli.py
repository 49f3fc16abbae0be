# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_dv_cli.py

"""dv / dv-regress argument handling and config loading."""

from __future__ import annotations

import pytest

from i2cbench.tools import dv, dv_regress


def test_parse_args_defaults(monkeypatch):
    for var in ("CMD", "SIM", "WAVES", "CHECK_EN", "COVERAGE_EN", "VERBOSITY"):
        monkeypatch.delenv(var, raising=False)
    args = dv.parse_args([])
    assert args.cmd == "both"
    assert args.sim == "icarus"
    assert (args.design, args.test) == ("i2c_master", "test_i2c_master")
    assert args.seeds is None
    assert args.nseeds == 0
    assert args.plusargs == []
    assert args.testcase is None


def test_validate_args():
    dv.validate_args(dv.parse_args(["--plusarg=+HOLD=1"]))
    with pytest.raises(SystemExit, match="plusarg"):
        dv.validate_args(dv.parse_args(["--plusarg=HOLD=1"]))
    with pytest.raises(SystemExit, match="nseeds"):
        dv.validate_args(dv.parse_args(["--nseeds=-1"]))


def test_derive_seeds():
    explicit = dv.parse_args(["--seeds", "5", "0x10"])
    assert dv.derive_seeds(explicit) == [5, 16]

    assert dv.derive_seeds(dv.parse_args([])) == [dv.DEFAULT_SEED]

    n = dv.parse_args(["--nseeds=3"])
    first = dv.derive_seeds(n)
    assert len(first) == 3
    assert dv.derive_seeds(n) == first
    other_base = dv.parse_args(["--nseeds=3", "--seed-base=7"])
    assert dv.derive_seeds(other_base) != first


def test_bench_run_dirs_and_switches(tmp_path):
    args = dv.parse_args(
        [
            f"--outdir={tmp_path}",
            "--sim=verilator",
            "--testcase=I2cMasterNackTest",
            "--check-en=0",
            "--plusarg=+STRETCH_HOLD_TICKS=40",
        ]
    )
    run = dv.bench_run(args)
    assert run.build_dir == (tmp_path / "builds" / "i2c_master.verilator").resolve()
    assert run.test_dir(9).name == "i2c_master.test_i2c_master.9"
    assert run.test_module == "i2cbench.i2c_master.dv.test_i2c_master"
    assert (run.check_en, run.coverage_en) == (False, True)
    assert run.plusargs == ("+STRETCH_HOLD_TICKS=40",)


def test_replay_cmd_pins_the_seed(monkeypatch):
    for var in ("SIM", "WAVES", "CHECK_EN", "COVERAGE_EN", "VERBOSITY"):
        monkeypatch.delenv(var, raising=False)
    run = dv.BenchRun(testcase="I2cMasterStretchTest", plusargs=("+RUN_CYCLES=9",))
    cmd = dv.replay_cmd(run, 1234)
    assert cmd.startswith("dv --design=i2c_master --test=test_i2c_master")
    assert "--testcase=I2cMasterStretchTest" in cmd
    assert "--plusarg=+RUN_CYCLES=9" in cmd
    assert "--check-en" not in cmd
    assert cmd.endswith("--seeds 1234")
    # replaying parses back to the same run
    assert dv.bench_run(dv.parse_args(cmd.split()[1:-2])) == run


def test_design_sources():
    names = [p.name for p in dv.design_sources("i2c_master")]
    assert names[-1] == "i2c_master.sv"
    with pytest.raises(FileNotFoundError):
        dv.design_sources("no_such_design")



def test_regress_load_config(tmp_path):
    cfg = tmp_path / "r.yaml"
    cfg.write_text(
        "defaults:\n"
        "  args: ['--design=i2c_master']\n"
        "jobs:\n"
        "  - name: a\n"
        "    args: '--test=t --nseeds=2'\n"
        "  - args: ['--test=t']\n",
        encoding="utf-8",
    )
    default_args, jobs = dv_regress.load_config(cfg)
    assert default_args == ["--design=i2c_master"]
    assert [j.name for j in jobs] == ["a", "job1"]
    assert jobs[0].args == ["--test=t", "--nseeds=2"]
    cmd = dv_regress.job_cmd(jobs[0], default_args, "out")
    assert cmd[1:3] == ["-m", "i2cbench.tools.dv"]
    assert cmd[3:] == ["--design=i2c_master", "--test=t", "--nseeds=2", "--outdir=out"]


@pytest.mark.parametrize(
    "text",
    [
        "- just a list\n",
        "jobs: []\n",
        "jobs:\n  - 3\n",
        "jobs:\n  - name: a\n  - name: a\n",
    ],
)
def test_regress_load_config_rejects(tmp_path, text):
    cfg = tmp_path / "r.yaml"
    cfg.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        dv_regress.load_config(cfg)


def test_regress_select_jobs():
    jobs = [dv_regress.Job("a", []), dv_regress.Job("b", [])]
    assert dv_regress.select_jobs(jobs, []) == jobs
    assert [j.name for j in dv_regress.select_jobs(jobs, ["b"])] == ["b"]
    with pytest.raises(ValueError, match="zzz"):
        dv_regress.select_jobs(jobs, ["zzz"])


def test_regress_dry_run_of_shipped_yaml(capsys):
    pkg_yaml = dv.PKG_DIR / "i2c_master" / "dv" / "dv_regress.yaml"
    rc = dv_regress.run_regress(
        dv_regress.parse_args([f"--file={pkg_yaml}", "--dry-run", "--only=nack"])
    )
    assert rc == 0
    out = capsys.readouterr().out
    assert out.startswith("nack: ")
    assert "--testcase=I2cMasterNackTest" in out


def test_regress_missing_file(tmp_path):
    args = dv_regress.parse_args([f"--file={tmp_path / 'none.yaml'}"])
    assert dv_regress.run_regress(args) == 1


def test_shipped_yaml_jobs_are_valid_dv_arguments():
    pkg_yaml = dv.PKG_DIR / "i2c_master" / "dv" / "dv_regress.yaml"
    default_args, jobs = dv_regress.load_config(pkg_yaml)
    for job in jobs:
        dv.validate_args(dv.parse_args([*default_args, *job.args]))
