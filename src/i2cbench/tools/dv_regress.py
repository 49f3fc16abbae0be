# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/tools/dv_regress.py

"""i2cbench: YAML-driven regression runner.

Every job is one ``dv`` invocation. Arguments come only from the YAML file;
the command line picks the file, the output directory and optionally a
subset of jobs by name.

YAML Schema:
    defaults:
      args: ["--sim=icarus", "--waves=0"]  # Optional, applied to every job

    jobs:
      - name: <job_name>
        args: ["--design=i2c_master", "--test=test_i2c_master", "--nseeds=2"]
      - name: <job_name2>
        args: "--design=i2c_master --test=test_i2c_master"  # or a single string

Job args come after the defaults, so a job can override any default.

Usage:
    dv-regress --file=src/i2cbench/i2c_master/dv/dv_regress.yaml [--outdir=out_dv]
    dv-regress --file=... --only=nack --only=stretch
    dv-regress --file=... --dry-run

After running, prints a colored report of copy-pasteable commands:
  PASS: <cmd>
  FAIL: <cmd>
"""

from __future__ import annotations

import argparse
import logging
import shlex
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

import yaml

from i2cbench import utils

DEFAULT_OUT_DIR = "out_dv"

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Job:
    """A single regression job."""

    name: str
    args: list[str]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="i2cbench YAML regression (strict, YAML-only)",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("--file", type=Path, required=True, help="Path to dv_regress.yaml")
    ap.add_argument("--outdir", default=DEFAULT_OUT_DIR, help="output directory")
    ap.add_argument(
        "--only",
        action="append",
        default=[],
        metavar="NAME",
        help="run only the named job (repeatable)",
    )
    ap.add_argument(
        "--dry-run", action="store_true", help="print the job commands and exit"
    )
    ap.add_argument(
        "--verbosity",
        choices=["critical", "error", "warning", "info", "debug", "notset"],
        default="info",
        help="logging level for the runner",
    )
    return ap.parse_args(argv)


def _as_str_list(x: Any) -> list[str]:
    """YAML value (None, str or list) -> argument list.

    A single string is split shell-style.
    """
    if x is None:
        return []
    if isinstance(x, str):
        return shlex.split(x)
    if isinstance(x, (list, tuple)):
        return [str(t) for t in x]
    raise ValueError(f"expected a string or a list of strings, got {type(x).__name__}")


def load_config(path: Path) -> tuple[list[str], list[Job]]:
    """Load (default_args, jobs) from a regression YAML file.

    Raises:
        ValueError: If the YAML structure is invalid, the jobs list is empty,
            or two jobs share a name.
    """
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping")

    defaults = data.get("defaults") or {}
    if not isinstance(defaults, dict):
        raise ValueError(f"{path}: 'defaults' must be a mapping")
    default_args = _as_str_list(defaults.get("args"))

    jobs_raw = data.get("jobs")
    if not isinstance(jobs_raw, list) or not jobs_raw:
        raise ValueError(f"{path}: 'jobs' must be a non-empty list")

    jobs: list[Job] = []
    seen: set[str] = set()
    for idx, j in enumerate(jobs_raw):
        if not isinstance(j, dict):
            raise ValueError(f"{path}: jobs[{idx}] must be a mapping")
        name = str(j.get("name") or f"job{idx}")
        if name in seen:
            raise ValueError(f"{path}: duplicate job name {name!r}")
        seen.add(name)
        jobs.append(Job(name=name, args=_as_str_list(j.get("args"))))

    return default_args, jobs


def select_jobs(jobs: list[Job], only: Sequence[str]) -> list[Job]:
    """Keep the jobs named in only (all jobs when only is empty).

    Raises:
        ValueError: If only names a job that does not exist.
    """
    if not only:
        return list(jobs)
    names = {j.name for j in jobs}
    unknown = [n for n in only if n not in names]
    if unknown:
        raise ValueError(f"unknown job(s): {', '.join(unknown)}")
    return [j for j in jobs if j.name in only]


def job_cmd(job: Job, default_args: Sequence[str], outdir: str) -> list[str]:
    """The dv command line for one job."""
    return [
        sys.executable,
        "-m",
        "i2cbench.tools.dv",
        *default_args,
        *job.args,
        f"--outdir={outdir}",
    ]


def _pretty_cmd(cmd: Sequence[str]) -> str:
    return " ".join(shlex.quote(x) for x in cmd)


def run_regress(args: argparse.Namespace) -> int:
    """Run the selected jobs in order and print the report.

    Returns:
        0 if every job passed, 1 if any failed or the config is invalid.
    """
    yaml_path = args.file.resolve()
    if not yaml_path.is_file():
        log.error("no file found at %s", yaml_path)
        return 1
    log.info("regression: %s", yaml_path)

    try:
        default_args, jobs = load_config(yaml_path)
        jobs = select_jobs(jobs, args.only)
    except ValueError as exc:
        log.error("%s", exc)
        return 1

    if args.dry_run:
        for job in jobs:
            print(f"{job.name}: {_pretty_cmd(job_cmd(job, default_args, args.outdir))}")
        return 0

    passes: list[str] = []
    fails: list[str] = []

    for job in jobs:
        cmd = job_cmd(job, default_args, args.outdir)
        cmd_str = _pretty_cmd(cmd)
        log.info("job: %s", job.name)
        log.info("cmd: %s", cmd_str)
        if subprocess.run(cmd, check=False).returncode == 0:
            passes.append(cmd_str)
        else:
            fails.append(cmd_str)

    print("\n[dv_regress] JOBS REPORT\n")
    for c in passes:
        print(f"{utils.green('PASS')}: {c}")
    for c in fails:
        print(f"{utils.red('FAIL')}: {c}")

    total = len(passes) + len(fails)
    if fails:
        print(f"\n[dv_regress] SUMMARY: {utils.red('FAIL')} ({len(fails)}/{total})")
        return 1
    print(f"\n[dv_regress] SUMMARY: {utils.green('PASS')} ({total}/{total})")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for ``dv-regress``."""
    args = parse_args(argv)
    utils.configure_logger(args.verbosity)
    return run_regress(args)


if __name__ == "__main__":
    raise SystemExit(main())
