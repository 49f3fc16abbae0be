# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_i2c_master_monitor_sb.py

"""Monitor, checker and scoreboard behavior on recorded tick traces.

The components are built without pyuvm elaboration; only the state that
per-tick sampling and adjudication touch is set up.
"""

from __future__ import annotations

import logging

import pytest

from i2cbench.i2c_master.dv.i2c_master_checker import I2cMasterChecker
from i2cbench.i2c_master.dv.i2c_master_item import I2cMasterItem
from i2cbench.i2c_master.dv.i2c_master_monitor import I2cMasterMonitor
from i2cbench.i2c_master.dv.i2c_master_rules import (
    OP_READ,
    OP_WRITE,
    EdgeDetector,
    StartStrobeRule,
    StretchWindowTracker,
    Verdict,
)
from i2cbench.i2c_master.dv.i2c_master_sb import I2cMasterSb

IDLE = {
    "addr": 0,
    "op": OP_WRITE,
    "din": 0,
    "dout": 0,
    "done": 0,
    "ack_err": 0,
    "stretch": 0,
    "busy": 0,
    "newd": 0,
    "state": 0,
}


class TraceBus:
    """Stands in for I2cMasterBusIf; read() returns the current tick's levels."""

    def __init__(self) -> None:
        self.now: dict[str, int | None] = dict(IDLE)

    def read(self, role: str) -> int | None:
        return self.now[role]

    def state(self) -> int | None:
        return self.now["state"]


@pytest.fixture
def monitor() -> I2cMasterMonitor:
    mon = I2cMasterMonitor.__new__(I2cMasterMonitor)
    mon.logger = logging.getLogger("test.mon")
    mon.item_count = 0
    mon.bus = TraceBus()
    mon.clear_observation()
    return mon


@pytest.fixture
def sb() -> I2cMasterSb:
    board = I2cMasterSb.__new__(I2cMasterSb)
    board.logger = logging.getLogger("test.sb")
    board.fail_on_error = False
    board.clear_stats()
    return board


def play(mon: I2cMasterMonitor, ticks: list[dict]) -> list[I2cMasterItem]:
    seen = []
    for n, levels in enumerate(ticks, start=1):
        mon.bus.now = {**IDLE, **levels}
        tr = mon.sample_tick(n)
        if tr is not None:
            mon.item_count += 1
            seen.append(tr)
    return seen


WRITE = {"addr": 0x3, "op": OP_WRITE, "din": 0x11, "dout": 0x99}


def test_done_held_high_emits_one_item(monitor):
    items = play(monitor, [WRITE, {**WRITE, "done": 1}, {**WRITE, "done": 1}, {}])
    assert len(items) == 1
    tr = items[0]
    assert tr.get_name() == "obs0"
    assert (tr.addr, tr.op, tr.data, tr.ack_err, tr.stretch) == (
        0x3,
        OP_WRITE,
        0x11,
        0,
        0,
    )


def test_read_takes_data_from_output_register(monitor):
    read = {"addr": 0x7, "op": OP_READ, "din": 0x11, "dout": 0x5A}
    (tr,) = play(monitor, [read, {**read, "done": 1}])
    assert tr.data == 0x5A


def test_stretch_gone_before_done_is_still_reported_once(monitor):
    ticks = [
        WRITE,
        {**WRITE, "stretch": 1},
        {**WRITE, "stretch": 1},
        WRITE,
        {**WRITE, "done": 1},
        {},
        {**WRITE, "done": 1},
    ]
    first, second = play(monitor, ticks)
    assert first.stretch == 1
    assert second.stretch == 0
    assert second.get_name() == "obs1"


def test_unresolved_ack_err_is_carried_as_none(monitor):
    (tr,) = play(monitor, [WRITE, {**WRITE, "done": 1, "ack_err": None}])
    assert tr.ack_err is None


def test_clear_observation_forgets_latched_stretch(monitor):
    play(monitor, [{"stretch": 1}])
    monitor.clear_observation()
    (tr,) = play(monitor, [{"done": 1}])
    assert tr.stretch == 0


def observed(ack_err: int | None, addr: int = 0x2) -> I2cMasterItem:
    tr = I2cMasterItem("obs")
    tr.addr = addr
    tr.data = 0x44
    tr.ack_err = ack_err
    return tr


def test_check_item_verdicts_and_counts(sb):
    assert sb.check_item(observed(0, addr=1)) is Verdict.PASS
    assert sb.check_item(observed(1, addr=2)) is Verdict.FAIL
    assert sb.check_item(observed(None, addr=3)) is Verdict.PASS

    assert (sb.vect_cnt, sb.pass_cnt, sb.err_cnt) == (3, 2, 1)
    assert sb.verdicts == [Verdict.PASS, Verdict.FAIL, Verdict.PASS]
    assert [o["addr"] for o in sb.observed] == [1, 2, 3]
    assert sb.failures == [observed(1, addr=2).to_dict()]


def test_check_item_logs_failure(sb, caplog):
    with caplog.at_level(logging.INFO, logger="test.sb"):
        sb.check_item(observed(1, addr=0x9))
    assert any(
        r.levelno == logging.ERROR and "FAIL addr=9" in r.getMessage()
        for r in caplog.records
    )


def test_final_phase_raises_only_when_asked(sb):
    sb.check_item(observed(1))
    sb.final_phase()
    sb.fail_on_error = True
    with pytest.raises(AssertionError, match="1 failure"):
        sb.final_phase()


@pytest.fixture
def checker() -> I2cMasterChecker:
    chk = I2cMasterChecker.__new__(I2cMasterChecker)
    chk.logger = logging.getLogger("test.chk")
    chk.bus = chk.dbg = TraceBus()
    chk.stretch_hold_ticks = 4
    chk.strobe_rule = StartStrobeRule()
    chk.stretch_rule = StretchWindowTracker(3, chk.stretch_hold_ticks)
    chk._done = EdgeDetector()
    chk._busy = EdgeDetector()
    chk.tick = chk.done_pulses = chk.busy_cycles = 0
    chk.violations = []
    return chk


def replay(chk: I2cMasterChecker, ticks: list[dict]) -> None:
    for levels in ticks:
        chk.bus.now = {**IDLE, **levels}
        chk.tick += 1
        chk.sample_tick(chk.tick)


ACK_ENTRY = [{"busy": 1, "state": 2}, {"busy": 1, "state": 3}]


def test_checker_reports_run_ending_inside_stretch_window(checker, caplog):
    replay(checker, ACK_ENTRY + [{"busy": 1, "state": 3, "stretch": 1}] * 2)
    with caplog.at_level(logging.INFO, logger="test.chk"):
        checker.report_phase()
    assert "inside a stretch window (2 of 4 ticks held)" in caplog.text
    assert checker.violations == []


def test_checker_closed_window_is_not_reported(checker, caplog):
    held = [{"busy": 1, "state": 3, "stretch": 1}] * 4
    replay(checker, ACK_ENTRY + held + [{"busy": 1, "state": 3}, {"done": 1}])
    with caplog.at_level(logging.INFO, logger="test.chk"):
        checker.report_phase()
    assert "inside a stretch window" not in caplog.text
    assert checker.stretch_rule.lengths == [4]
    assert (checker.done_pulses, checker.busy_cycles) == (1, 1)
    assert checker.violations == []
