# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/shared/dv/clock_reset.py

"""Clock generator and power-on reset pulse for the controller."""

from __future__ import annotations

import cocotb
import pyuvm
from cocotb.clock import Clock
from cocotb.task import Task
from cocotb.triggers import NextTimeStep, ReadWrite

from . import utils_dv
from .tick_mixin import TickMixin


class ClockResetDriver(TickMixin, pyuvm.uvm_component):
    """Free-running clock plus one synchronous reset pulse at t=0.

    The clock starts in start_of_simulation_phase and stops in final_phase.
    Reset is asserted at t=0, released on the drive edge after reset_cycles
    ticks, and followed by reset_settle_cycles idle ticks.

    Configuration (via config_db):
        clock_start_high (bool): default False
        reset_name (str): default "rst"
        reset_active_low (bool): default False
        reset_cycles (int): default 5
        reset_settle_cycles (int): default 0
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.apply_log_level(self)
        self._tick_init()
        self.clock_start_high: bool = False
        self.reset_name: str = "rst"
        self.reset_active_low: bool = False
        self.reset_cycles: int = 5
        self.reset_settle_cycles: int = 0
        self._clock_task: Task | None = None

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self._tick_bind()
        get = utils_dv.lookup
        self.clock_start_high = get(self, "clock_start_high", self.clock_start_high)
        self.reset_name = get(self, "reset_name", self.reset_name)
        self.reset_active_low = get(self, "reset_active_low", self.reset_active_low)
        self.reset_cycles = get(self, "reset_cycles", self.reset_cycles)
        self.reset_settle_cycles = get(
            self, "reset_settle_cycles", self.reset_settle_cycles
        )
        if self.reset_cycles < 0 or self.reset_settle_cycles < 0:
            raise ValueError(
                f"reset_cycles={self.reset_cycles} and "
                f"reset_settle_cycles={self.reset_settle_cycles} must be >= 0"
            )
        self.logger.debug("end_of_elaboration_phase end")

    def start_of_simulation_phase(self) -> None:
        self.logger.debug("start_of_simulation_phase begin")
        super().start_of_simulation_phase()
        clock = Clock(self._clk, self.clock_period_ps, unit="ps")
        self._clock_task = cocotb.start_soon(
            clock.start(start_high=self.clock_start_high)
        )
        self.logger.debug(
            "clock %s running, period %d ps", self.clock_name, self.clock_period_ps
        )
        self.logger.debug("start_of_simulation_phase end")

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        rst = utils_dv.dut_signal(self._dut, self.reset_name)
        asserted = 0 if self.reset_active_low else 1

        rst.value = asserted
        # let the t=0 write land before counting edges
        await ReadWrite()
        await NextTimeStep()
        for _ in range(self.reset_cycles):
            await self.drive_edge()
        rst.value = 1 - asserted
        self.logger.info(
            "%s released after %d ticks", self.reset_name, self.reset_cycles
        )
        for _ in range(self.reset_settle_cycles):
            await self.drive_edge()
        self.logger.debug("run_phase end")

    def final_phase(self) -> None:
        self.logger.debug("final_phase begin")
        if self._clock_task is not None:
            self._clock_task.cancel()
            self._clock_task = None
        super().final_phase()
        self.logger.debug("final_phase end")
