# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/i2c_master/dv/i2c_master_checker.py

"""Passive per-tick protocol checker for the i2c_master bench."""

from __future__ import annotations

from typing import cast

import pyuvm

from i2cbench.shared.dv import utils_dv
from i2cbench.shared.dv.tick_mixin import TickMixin

from .i2c_master_bus_if import I2cMasterBusIf, I2cMasterDebugPort
from .i2c_master_rules import (
    DEFAULT_ACK_STATE_CODE,
    DEFAULT_STRETCH_HOLD_TICKS,
    EdgeDetector,
    StartStrobeRule,
    StretchWindowTracker,
)


class I2cMasterChecker(TickMixin, pyuvm.uvm_component):
    """Watches the bus every tick and records rule violations.

    Rules:
        - newd rises only when busy was 0 on the previous tick
        - newd is high for exactly one tick
        - a stretch window opens on the tick after the acknowledge-state entry
          and lasts exactly stretch_hold_ticks ticks

    It also counts done pulses and busy 0->1->0 cycles for the tests.

    Configuration (via config_db):
        bus_if, dbg_port: Shared bus objects (required)
        ack_state_code (int): default 3
        stretch_hold_ticks (int): default 1200
        chk_fail_on_error (bool): Raise in check_phase on violations
                                  (default: True)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.apply_log_level(self)
        self._tick_init()
        self.bus: I2cMasterBusIf
        self.dbg: I2cMasterDebugPort
        self.ack_state_code: int = DEFAULT_ACK_STATE_CODE
        self.stretch_hold_ticks: int = DEFAULT_STRETCH_HOLD_TICKS
        self.fail_on_error: bool = True
        self.strobe_rule = StartStrobeRule()
        self.stretch_rule: StretchWindowTracker
        self._done = EdgeDetector()
        self._busy = EdgeDetector()
        self.tick: int = 0
        self.done_pulses: int = 0
        self.busy_cycles: int = 0
        self.violations: list[str] = []

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self._tick_bind()
        self.bus = cast(I2cMasterBusIf, utils_dv.require(self, "bus_if"))
        self.dbg = cast(I2cMasterDebugPort, utils_dv.require(self, "dbg_port"))
        get = utils_dv.lookup
        self.ack_state_code = get(self, "ack_state_code", self.ack_state_code)
        self.stretch_hold_ticks = get(
            self, "stretch_hold_ticks", self.stretch_hold_ticks
        )
        self.fail_on_error = get(self, "chk_fail_on_error", self.fail_on_error)
        self.stretch_rule = StretchWindowTracker(
            self.ack_state_code, self.stretch_hold_ticks
        )
        self.logger.debug("end_of_elaboration_phase end")

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        while True:
            await self.sample_edge()
            self.tick += 1
            self.sample_tick(self.tick)

    def sample_tick(self, tick: int) -> None:
        bus = self.bus
        busy = bus.read("busy")
        found = self.strobe_rule.sample(tick, bus.read("newd"), busy)
        found += self.stretch_rule.sample(tick, self.dbg.state(), bus.read("stretch"))
        if self._done.update(bus.read("done")):
            self.done_pulses += 1
        self._busy.update(busy)
        if self._busy.fell:
            self.busy_cycles += 1
        for msg in found:
            self.logger.error("PROTOCOL %s", msg)
        self.violations.extend(found)

    def report_phase(self) -> None:
        self.logger.debug("report_phase begin")
        self.logger.info(
            "I2cMasterChecker summary: ticks=%d strobes=%d done_pulses=%d "
            "busy_cycles=%d stretch_windows=%d violations=%d",
            self.tick,
            self.strobe_rule.strobes,
            self.done_pulses,
            self.busy_cycles,
            self.stretch_rule.windows,
            len(self.violations),
        )
        if self.stretch_rule.open:
            self.logger.warning(
                "run ended inside a stretch window (%d of %d ticks held)",
                self.stretch_rule.open_ticks,
                self.stretch_hold_ticks,
            )
        self.logger.debug("report_phase end")

    def check_phase(self) -> None:
        self.logger.debug("check_phase begin")
        super().check_phase()
        if self.fail_on_error and self.violations:
            raise AssertionError(
                f"{len(self.violations)} protocol violation(s), first: "
                f"{self.violations[0]}"
            )
        self.logger.debug("check_phase end")
