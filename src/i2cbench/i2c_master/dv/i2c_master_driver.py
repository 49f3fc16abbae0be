# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/i2c_master/dv/i2c_master_driver.py

"""Driver for the i2c_master stimulus side."""

from __future__ import annotations

from typing import cast

import pyuvm

from i2cbench.shared.dv import utils_dv
from i2cbench.shared.dv.base_driver import BaseDriver

from .i2c_master_bus_if import I2cMasterBusIf, I2cMasterDebugPort
from .i2c_master_item import I2cMasterItem
from .i2c_master_rules import DEFAULT_ACK_STATE_CODE, DEFAULT_STRETCH_HOLD_TICKS


class I2cMasterDriver(BaseDriver[I2cMasterItem]):  # pylint: disable=too-many-ancestors
    """Sole writer of newd, op, addr, din and stretch.

    Per item, every step on a drive edge:
        1. wait for busy == 0
        2. drive addr, op, din
        3. next edge: raise newd; lower it on the first edge that sees busy == 1
        4. if stretch: wait for dbg_state == ack_state_code, hold stretch high
           for stretch_hold_ticks edges, then lower it
        5. wait for done == 1, then busy == 0, then one settle edge

    There are no timeouts. A controller that never answers blocks the driver
    until the test's run length expires.

    Configuration (via config_db):
        bus_if (I2cMasterBusIf): Shared bus interface (required)
        dbg_port (I2cMasterDebugPort): Debug port (required)
        ack_state_code (int): State code of the first acknowledge (default: 3)
        stretch_hold_ticks (int): Stretch-hold length in ticks (default: 1200)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        self.bus: I2cMasterBusIf
        self.dbg: I2cMasterDebugPort
        self.ack_state_code: int = DEFAULT_ACK_STATE_CODE
        self.stretch_hold_ticks: int = DEFAULT_STRETCH_HOLD_TICKS
        self.items_driven: int = 0

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self.bus = cast(I2cMasterBusIf, utils_dv.require(self, "bus_if"))
        self.dbg = cast(I2cMasterDebugPort, utils_dv.require(self, "dbg_port"))
        get = utils_dv.lookup
        self.ack_state_code = get(self, "ack_state_code", self.ack_state_code)
        self.stretch_hold_ticks = get(
            self, "stretch_hold_ticks", self.stretch_hold_ticks
        )
        if self.stretch_hold_ticks <= 0:
            raise ValueError(
                f"stretch_hold_ticks must be > 0, got {self.stretch_hold_ticks}"
            )
        self.bus.claim_inputs(self.get_full_name())
        self.logger.debug("end_of_elaboration_phase end")

    async def apply_initial_dut_inputs(self) -> None:
        self.bus.drive_idle(self.get_full_name())

    def _drive(self, role: str, value: int) -> None:
        self.bus.drive(role, value, self.get_full_name())

    async def _wait_until(self, role: str, value: int, now: bool = False) -> None:
        """Poll a response port on drive edges until it reads value.

        With now=True the current value counts, for callers already sitting on
        a drive edge.
        """
        if now and self.bus.read(role) == value:
            return
        while True:
            await self.drive_edge()
            if self.bus.read(role) == value:
                return

    async def drive_item(self, tr: I2cMasterItem) -> None:
        self.logger.debug("drive_item begin: %s", tr.inputs_str())

        # 1. one transfer in flight at a time
        await self._wait_until("busy", 0)

        # 2. operands, seen by the controller at the next rising edge
        self._drive("addr", int(tr.addr or 0))
        self._drive("op", int(tr.op or 0))
        self._drive("din", int(tr.data or 0))

        # 3. one-tick start strobe
        await self.drive_edge()
        self._drive("newd", 1)
        await self._wait_until("busy", 1)
        self._drive("newd", 0)

        # 4. stretch window keyed to the acknowledge state
        if tr.stretch:
            while True:
                await self.drive_edge()
                if self.dbg.state() == self.ack_state_code:
                    break
            self._drive("stretch", 1)
            self.logger.info(
                "stretch asserted for %d ticks (addr=%s)",
                self.stretch_hold_ticks,
                tr.addr,
            )
            for _ in range(self.stretch_hold_ticks):
                await self.drive_edge()
            self._drive("stretch", 0)
        else:
            self._drive("stretch", 0)

        # 5. completion, idle, settle
        await self._wait_until("done", 1)
        await self._wait_until("busy", 0, now=True)
        await self.drive_edge()

        self.items_driven += 1
        self.logger.debug("drive_item end: %d driven", self.items_driven)
