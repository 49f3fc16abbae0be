# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/shared/dv/base_driver.py

"""Base driver: idle inputs at t=0, sit out the reset pulse, then drive items."""

from __future__ import annotations

from typing import Generic, TypeVar

import cocotb
import pyuvm
from cocotb.triggers import Event, NextTimeStep, ReadOnly, ReadWrite

from . import utils_dv
from .base_item import BaseItem
from .tick_mixin import TickMixin

T = TypeVar("T", bound=BaseItem)


class BaseDriver(TickMixin, pyuvm.uvm_driver, Generic[T]):
    """Pulls items from the sequencer once the controller is out of reset.

    A watcher task follows the reset line and keeps two events in step with
    its level, so run_phase can wait for the pulse to start and then to end
    without caring about polarity. Each item is handed to drive_item() and
    acknowledged with item_done() when that returns.

    Subclasses must implement:
        apply_initial_dut_inputs(): Put the stimulus side in its idle state
        drive_item(tr): Drive one transaction to completion

    Configuration (via config_db):
        reset_name (str): default "rst"
        reset_active_low (bool): default False
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.apply_log_level(self)
        self._tick_init()
        self.reset_name: str = "rst"
        self.reset_active_low: bool = False
        self.in_reset: bool = False
        self._rst_on: Event = Event()
        self._rst_off: Event = Event()
        self._rst_off.set()

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self._tick_bind()
        self.reset_name = utils_dv.lookup(self, "reset_name", self.reset_name)
        self.reset_active_low = utils_dv.lookup(
            self, "reset_active_low", self.reset_active_low
        )
        self.logger.debug("end_of_elaboration_phase end")

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        cocotb.start_soon(self._follow_reset())
        await self.apply_initial_dut_inputs()
        await ReadWrite()
        await NextTimeStep()
        await self._rst_on.wait()
        await self._rst_off.wait()
        self.logger.debug("out of reset, taking items")
        while True:
            tr: T = await self.seq_item_port.get_next_item()
            await self.drive_item(tr)
            self.seq_item_port.item_done()

    async def _follow_reset(self) -> None:
        rst = utils_dv.dut_signal(self._dut, self.reset_name)
        await ReadOnly()
        while True:
            level = utils_dv.read_int(rst.value)
            if level is not None:
                self._set_in_reset(bool(level) != self.reset_active_low)
            await rst.value_change
            await ReadOnly()

    def _set_in_reset(self, active: bool) -> None:
        if active == self.in_reset:
            return
        self.in_reset = active
        if active:
            self._rst_off.clear()
            self._rst_on.set()
        else:
            self._rst_on.clear()
            self._rst_off.set()
        state = "asserted" if active else "released"
        self.logger.debug("%s %s", self.reset_name, state)

    async def apply_initial_dut_inputs(self) -> None:
        raise NotImplementedError("Implement idle input values here")

    async def drive_item(self, tr: T) -> None:
        raise NotImplementedError("Implement DUT signal driving here")
