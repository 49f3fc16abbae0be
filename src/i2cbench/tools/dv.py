# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/tools/dv.py

"""Build the i2c_master reference RTL and run a bench test module with cocotb.

Command-line interface:
    dv [--design=i2c_master] [--test=test_i2c_master] [OPTIONS]

Typical usage:
    # Every test of the module, one seed
    dv

    # One test on Icarus, three derived seeds
    dv --testcase=I2cMasterStretchTest --sim=icarus --nseeds=3

    # Bench knobs go through as plusargs
    dv --plusarg=+STRETCH_HOLD_TICKS=600

The design is compiled once into <outdir>/builds/<design>.<sim>; each seed
then runs in <outdir>/tests/<design>.<test>.<seed> and prints one colored
PASS/FAIL line with the command that replays it.
"""

from __future__ import annotations

import argparse
import logging
import os
import random
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, Sequence

from cocotb_tools.runner import get_results, get_runner

from i2cbench import utils

PKG_DIR: Final[Path] = Path(__file__).resolve().parents[1]
DEFAULT_OUT_DIR = "out_dv"
DEFAULT_SEED = 42

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BenchRun:  # pylint: disable=too-many-instance-attributes
    """Everything the cocotb runner needs for one build and its test runs."""

    design: str = "i2c_master"
    test: str = "test_i2c_master"
    testcase: str | None = None
    sim: str = "icarus"
    outdir: Path = Path(DEFAULT_OUT_DIR)
    waves: bool = False
    verbosity: str = "info"
    check_en: bool = True
    coverage_en: bool = True
    plusargs: tuple[str, ...] = field(default_factory=tuple)

    @property
    def build_dir(self) -> Path:
        return (self.outdir / "builds" / f"{self.design}.{self.sim}").resolve()

    @property
    def test_module(self) -> str:
        return f"i2cbench.{self.design}.dv.{self.test}"

    def test_dir(self, seed: int) -> Path:
        return (self.outdir / "tests" / f"{self.design}.{self.test}.{seed}").resolve()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="Build the reference RTL and run an i2cbench test module",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument(
        "--cmd",
        choices=["build", "test", "both"],
        default=os.getenv("CMD", "both"),
        help="run only build, only test, or both",
    )
    ap.add_argument(
        "--sim",
        choices=["icarus", "verilator"],
        default=os.getenv("SIM", "icarus"),
        help="simulator",
    )
    ap.add_argument("--design", default="i2c_master", help="design under rtl/")
    ap.add_argument(
        "--test", default="test_i2c_master", help="i2cbench.<design>.dv.<test>"
    )
    ap.add_argument(
        "--testcase",
        default=None,
        help="run only the named test class(es) of the module (regex)",
    )
    ap.add_argument("--outdir", default=DEFAULT_OUT_DIR, help="output directory")
    ap.add_argument(
        "--verbosity",
        choices=["critical", "error", "warning", "info", "debug"],
        default=os.getenv("VERBOSITY", "info"),
        help="log level for the tool and the bench",
    )
    ap.add_argument(
        "--waves",
        choices=["0", "1"],
        default=os.getenv("WAVES", "0"),
        help="dump waveforms",
    )
    ap.add_argument(
        "--seeds",
        nargs="+",
        metavar="SEED",
        help="explicit seeds (decimal, 0x..., or 'random'); overrides --nseeds",
    )
    ap.add_argument(
        "--nseeds", type=int, default=0, help="derive N seeds from --seed-base"
    )
    ap.add_argument(
        "--seed-base", type=int, default=1999, help="base for derived seeds"
    )
    ap.add_argument(
        "--check-en",
        choices=["0", "1"],
        default=os.getenv("CHECK_EN", "1"),
        help="build the protocol checker",
    )
    ap.add_argument(
        "--coverage-en",
        choices=["0", "1"],
        default=os.getenv("COVERAGE_EN", "1"),
        help="collect functional coverage",
    )
    ap.add_argument(
        "--plusarg",
        dest="plusargs",
        action="append",
        default=[],
        help="bench knob as a plusarg, e.g. +STRETCH_HOLD_TICKS=600 (repeatable)",
    )
    return ap.parse_args(argv)


def validate_args(args: argparse.Namespace) -> None:
    """Raises SystemExit on values argparse cannot check by itself."""
    if args.nseeds < 0:
        raise SystemExit(f"[dv]: error: --nseeds must be >= 0, got {args.nseeds}")
    for p in args.plusargs:
        if not p.startswith("+"):
            raise SystemExit(f"[dv]: error: plusarg {p!r} must start with '+'")


def derive_seeds(args: argparse.Namespace) -> list[int]:
    """Explicit --seeds, else --nseeds drawn from --seed-base, else one fixed seed.

    The same arguments always give the same list.
    """
    rng = random.Random(args.seed_base & 0xFFFF_FFFF)
    if args.seeds:
        return [utils.normalize_seed(rng, s) for s in args.seeds]
    if args.nseeds > 0:
        return [rng.getrandbits(32) for _ in range(args.nseeds)]
    return [DEFAULT_SEED]


def bench_run(args: argparse.Namespace) -> BenchRun:
    return BenchRun(
        design=args.design,
        test=args.test,
        testcase=args.testcase,
        sim=args.sim,
        outdir=Path(args.outdir),
        waves=args.waves == "1",
        verbosity=args.verbosity,
        check_en=args.check_en == "1",
        coverage_en=args.coverage_en == "1",
        plusargs=tuple(args.plusargs),
    )


def design_sources(design: str) -> list[Path]:
    """HDL sources of a design, in compile order.

    Raises:
        FileNotFoundError: If the design has no rtl/srclist.f.
    """
    srclist = PKG_DIR / design / "rtl" / "srclist.f"
    if not srclist.is_file():
        raise FileNotFoundError(f"[dv] no srclist for design {design!r}: {srclist}")
    return utils.read_srclist(srclist, PKG_DIR)


def run_build(run: BenchRun) -> None:
    """Compile the design; the runner skips it when nothing changed."""
    build_args = ["--timing", "-Wno-fatal"] if run.sim == "verilator" else []
    log.info("building %s with %s in %s", run.design, run.sim, run.build_dir)
    get_runner(run.sim).build(
        sources=design_sources(run.design),
        hdl_toplevel=run.design,
        timescale=("1ns", "1ps"),
        waves=run.waves,
        build_dir=run.build_dir,
        build_args=build_args,
    )


def run_test(run: BenchRun, seed: int, results_xml: Path | None = None) -> Path:
    """Run the test module against the build for one seed.

    Returns:
        The JUnit results file the run wrote.
    """
    test_dir = run.test_dir(seed)
    test_dir.mkdir(parents=True, exist_ok=True)
    results = results_xml or test_dir / "results.xml"
    log.info("running %s seed=%d in %s", run.test_module, seed, test_dir)
    get_runner(run.sim).test(
        hdl_toplevel=run.design,
        hdl_toplevel_lang="verilog",
        test_module=run.test_module,
        test_filter=run.testcase,
        build_dir=run.build_dir,
        test_dir=test_dir,
        waves=run.waves,
        seed=seed,
        plusargs=[
            f"+CHECK_EN={int(run.check_en)}",
            f"+COVERAGE_EN={int(run.coverage_en)}",
            *run.plusargs,
        ],
        extra_env={"COCOTB_LOG_LEVEL": run.verbosity.upper()},
        results_xml=str(results),
    )
    return results


def replay_cmd(run: BenchRun, seed: int) -> str:
    argv = ["dv", f"--design={run.design}", f"--test={run.test}", f"--sim={run.sim}"]
    if run.testcase:
        argv.append(f"--testcase={run.testcase}")
    if not run.check_en:
        argv.append("--check-en=0")
    if not run.coverage_en:
        argv.append("--coverage-en=0")
    argv += [f"--plusarg={p}" for p in run.plusargs]
    argv += ["--seeds", str(seed)]
    return " ".join(shlex.quote(a) for a in argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for ``dv``.

    Returns:
        0 when every seed passed, 1 otherwise.
    """
    args = parse_args(argv)
    validate_args(args)
    run = bench_run(args)
    run.outdir.mkdir(parents=True, exist_ok=True)
    utils.configure_logger(args.verbosity, run.outdir / "dv.log")

    if args.cmd in {"build", "both"}:
        run_build(run)
    if args.cmd == "build":
        return 0
    if not run.build_dir.is_dir():
        log.error("no build in %s, run with --cmd=build first", run.build_dir)
        return 1

    rc = 0
    for seed in derive_seeds(args):
        num_tests, num_failed = get_results(run_test(run, seed))
        passed = num_tests - num_failed
        ok = num_tests > 0 and num_failed == 0
        label = utils.green("PASS") if ok else utils.red("FAIL")
        print(f"{label} ({passed}/{num_tests}): {replay_cmd(run, seed)}")
        rc |= 0 if ok else 1
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
