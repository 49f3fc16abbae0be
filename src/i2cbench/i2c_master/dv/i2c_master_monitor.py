# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/i2c_master/dv/i2c_master_monitor.py

"""Completion monitor for i2c_master."""

from __future__ import annotations

from typing import cast

import pyuvm

from i2cbench.shared.dv import utils_dv
from i2cbench.shared.dv.base_monitor import BaseMonitor

from .i2c_master_bus_if import I2cMasterBusIf
from .i2c_master_item import I2cMasterItem
from .i2c_master_rules import EdgeDetector, StickyBit, select_data


class I2cMasterMonitor(BaseMonitor[I2cMasterItem]):  # pylint: disable=too-many-ancestors
    """Publishes one observed item per rising edge of done.

    The observed item is built fresh from signal values on the completion tick:
    addr and op as currently driven, data from din for writes and dout for
    reads, ack_err from the controller. stretch is whether the stretch-hold line
    was seen high at any tick since the previous completion, because the line
    is always low again by the time done rises.
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        self.bus: I2cMasterBusIf
        self.clear_observation()

    def clear_observation(self) -> None:
        """Forget the done history and any latched stretch level."""
        self._done = EdgeDetector()
        self._stretch_seen = StickyBit()

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self.bus = cast(I2cMasterBusIf, utils_dv.require(self, "bus_if"))
        self.logger.debug("end_of_elaboration_phase end")

    def sample_tick(self, tick: int) -> I2cMasterItem | None:
        bus = self.bus
        self._stretch_seen.update(bus.read("stretch"))
        if not self._done.update(bus.read("done")):
            return None

        tr = I2cMasterItem(f"obs{self.item_count}")
        tr.addr = bus.read("addr")
        tr.op = bus.read("op")
        tr.data = select_data(tr.op, bus.read("din"), bus.read("dout"))
        tr.ack_err = bus.read("ack_err")
        tr.stretch = self._stretch_seen.take()
        self.logger.debug("tick %d observed %s", tick, tr)
        return tr
