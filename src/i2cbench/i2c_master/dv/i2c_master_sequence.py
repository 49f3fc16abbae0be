# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/i2c_master/dv/i2c_master_sequence.py

"""Sequencer and stretch-script sequence for i2c_master verification."""

from __future__ import annotations

from typing import Sequence

import pyuvm

from i2cbench.shared.dv import utils_dv
from i2cbench.shared.dv.base_sequence import BaseSequence

from .i2c_master_item import I2cMasterItem, within
from .i2c_master_rules import (
    DEFAULT_GEN_ADDR_RANGE,
    DEFAULT_GEN_DATA_RANGE,
    DEFAULT_STRETCH_SCRIPT,
    OP_WRITE,
)


class I2cMasterSequencer(pyuvm.uvm_sequencer):
    """Hands sequence items to the driver in order, one at a time."""

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.apply_log_level(self)


class I2cMasterSequence(BaseSequence[I2cMasterItem]):
    """One write per entry of a stretch script, addr/data randomized.

    The default script is (False, True): a plain write followed by a write
    with clock stretching. Directed tests pass a one-entry script and pin
    addr/data by setting the generator ranges to a single value.

    Generation is lazy. Each item is randomized only after the sequencer
    grants it, and finish_item() waits for the driver's item_done(), so the
    second script entry is produced after the first transfer has completed,
    not up front.

    Configuration (via config_db, looked up through the sequencer):
        gen_addr_range ((int, int)): Inline addr range (default: (0, 10))
        gen_data_range ((int, int)): Inline data range (default: (1, 5))
        addr_constraint ((int, int)): Per-item class addr constraint override
        data_constraint ((int, int)): Per-item class data constraint override
    """

    def __init__(
        self,
        name: str = "i2c_master_seq",
        stretch_script: Sequence[bool] = DEFAULT_STRETCH_SCRIPT,
    ) -> None:
        self.stretch_script: tuple[bool, ...] = tuple(bool(s) for s in stretch_script)
        if not self.stretch_script:
            raise ValueError("stretch_script must not be empty")
        super().__init__(name, len(self.stretch_script))
        self.gen_addr_range: tuple[int, int] = DEFAULT_GEN_ADDR_RANGE
        self.gen_data_range: tuple[int, int] = DEFAULT_GEN_DATA_RANGE
        self.addr_constraint: tuple[int, int] | None = None
        self.data_constraint: tuple[int, int] | None = None
        self.op: int = OP_WRITE

    async def body_pre(self) -> None:
        self.logger.debug("I2cMasterSequence body_pre begin")
        sqr, get = self.sequencer, utils_dv.lookup
        self.gen_addr_range = get(sqr, "gen_addr_range", self.gen_addr_range)
        self.gen_data_range = get(sqr, "gen_data_range", self.gen_data_range)
        self.addr_constraint = get(sqr, "addr_constraint", None)
        self.data_constraint = get(sqr, "data_constraint", None)
        self.logger.debug("I2cMasterSequence body_pre end")

    async def set_item_inputs(self, item: I2cMasterItem, index: int) -> None:
        if self.addr_constraint is not None:
            item.addr_constraint = self.addr_constraint
        if self.data_constraint is not None:
            item.data_constraint = self.data_constraint
        item.randomize_with(within(self.gen_addr_range, self.gen_data_range))
        item.op = self.op
        item.stretch = int(self.stretch_script[index])
        self.logger.info("generated %s: %s", item.get_name(), item.inputs_str())
