# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/shared/dv/tick_mixin.py

"""Clock-tick alignment shared by every component that touches the bus."""

from __future__ import annotations

from typing import Any, cast

import pyuvm
from cocotb.handle import SimHandleBase
from cocotb.triggers import ReadOnly

from . import utils_dv


class TickMixin:
    """One tick is one period of the controller clock.

    Writers call drive_edge() and change inputs on the falling edge. Readers
    call sample_edge(), which returns after the rising edge once the design has
    settled. A value written during tick N is therefore what the controller
    and every observer see at the rising edge that closes tick N.

    Configuration (via config_db):
        dut: cocotb.top (required)
        clock_name (str): default "clk"
        clock_period_ps (int): default 10000
    """

    def _tick_init(self) -> None:
        self.clock_name: str = "clk"
        self.clock_period_ps: int = 10_000
        self._dut: Any | None = None
        self._clk: SimHandleBase | None = None

    def _tick_bind(self) -> None:
        """Pull the clock knobs and bind the clock handle (end of elaboration)."""
        comp = cast(pyuvm.uvm_component, self)
        self.clock_name = utils_dv.lookup(comp, "clock_name", self.clock_name)
        self.clock_period_ps = utils_dv.lookup(
            comp, "clock_period_ps", self.clock_period_ps
        )
        if self.clock_period_ps <= 0:
            raise ValueError(f"clock_period_ps must be > 0, got {self.clock_period_ps}")
        self._dut = utils_dv.require(comp, "dut")
        self._clk = utils_dv.dut_signal(self._dut, self.clock_name)

    async def drive_edge(self) -> None:
        assert self._clk is not None, "drive_edge before _tick_bind"
        await self._clk.falling_edge

    async def sample_edge(self) -> None:
        assert self._clk is not None, "sample_edge before _tick_bind"
        await self._clk.rising_edge
        await ReadOnly()
