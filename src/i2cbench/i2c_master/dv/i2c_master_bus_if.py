# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/i2c_master/dv/i2c_master_bus_if.py

"""Bus interface and debug port for the i2c_master controller."""

from __future__ import annotations

from typing import Any, Mapping

from cocotb.handle import SimHandleBase

from i2cbench.shared.dv import utils_dv

from .i2c_master_rules import (
    DEBUG_ROLES,
    DEFAULT_SIGNAL_MAP,
    IDLE_STIMULUS,
    RESPONSE_ROLES,
    STIMULUS_ROLES,
)


def resolve_signal_map(overrides: Mapping[str, str] | None = None) -> dict[str, str]:
    """Merge role->name overrides onto the default signal map."""
    smap = dict(DEFAULT_SIGNAL_MAP)
    for role, name in (overrides or {}).items():
        if role not in smap:
            raise ValueError(f"unknown bus role {role!r}")
        smap[role] = name
    return smap


class I2cMasterBusIf:
    """The controller's behavioral ports as one shared object.

    Every component reads through read(). Only the component that called
    claim_inputs() may write the stimulus side (newd, op, addr, din, stretch);
    anyone else gets a RuntimeError.

    The debug state code is not reachable from here, see I2cMasterDebugPort.
    """

    def __init__(self, dut: Any, signal_map: Mapping[str, str] | None = None) -> None:
        self.signal_map = resolve_signal_map(signal_map)
        self._owner: str | None = None
        self._handles: dict[str, SimHandleBase] = {
            role: utils_dv.dut_signal(dut, self.signal_map[role])
            for role in STIMULUS_ROLES + RESPONSE_ROLES
        }

    @property
    def owner(self) -> str | None:
        return self._owner

    def claim_inputs(self, owner: str) -> None:
        """Become the single writer of the stimulus side."""
        if self._owner is not None and self._owner != owner:
            raise RuntimeError(
                f"bus inputs already owned by {self._owner!r}; "
                f"{owner!r} cannot claim them"
            )
        self._owner = owner

    def drive(self, role: str, value: int, owner: str) -> None:
        if role not in STIMULUS_ROLES:
            raise ValueError(f"{role!r} is not a stimulus role")
        if owner != self._owner:
            raise RuntimeError(
                f"{owner!r} wrote {role!r} but bus inputs are owned by "
                f"{self._owner!r}"
            )
        self._handles[role].value = value

    def drive_idle(self, owner: str) -> None:
        for role, value in IDLE_STIMULUS.items():
            self.drive(role, value, owner)

    def read(self, role: str) -> int | None:
        """Current value of a behavioral port, None if X/Z."""
        return utils_dv.read_int(self._handles[role].value)


class I2cMasterDebugPort:
    """Read-only view of the controller's internal state code.

    Debug only: the bench keys stretch injection off it, nothing else.
    """

    def __init__(self, dut: Any, signal_map: Mapping[str, str] | None = None) -> None:
        smap = resolve_signal_map(signal_map)
        self._handles: dict[str, SimHandleBase] = {
            role: utils_dv.dut_signal(dut, smap[role]) for role in DEBUG_ROLES
        }

    def state(self) -> int | None:
        return utils_dv.read_int(self._handles["dbg_state"].value)
