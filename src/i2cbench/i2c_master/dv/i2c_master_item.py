# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/i2c_master/dv/i2c_master_item.py

"""Sequence item for i2c_master verification."""

from __future__ import annotations

from typing import Callable

from cocotb_coverage.crv import Randomized

from i2cbench.shared.dv.base_item import BaseItem

from .i2c_master_rules import (
    ADDR_WIDTH,
    DATA_WIDTH,
    DEFAULT_ADDR_RANGE,
    DEFAULT_DATA_RANGE,
    OP_WRITE,
    RandomizationError,
)


class I2cMasterItem(BaseItem, Randomized):
    """One requested bus operation, or one observed completion.

    Inputs: addr, op, data, stretch
    Outputs: ack_err (None until the monitor fills it)

    addr and data are random variables over their full bus width. The class
    constraints keep them inside addr_constraint and data_constraint; a
    subclass or an instance may widen or narrow those bounds before
    randomizing. A generator adds its own ranges through randomize_with().
    """

    INPUTS = ("addr", "op", "data", "stretch")
    OUTPUTS = ("ack_err",)

    addr_constraint: tuple[int, int] = DEFAULT_ADDR_RANGE
    data_constraint: tuple[int, int] = DEFAULT_DATA_RANGE

    def __init__(self, name: str = "i2c_master_item") -> None:
        super().__init__(name)
        Randomized.__init__(self)
        self.addr: int | None = 0
        self.op: int | None = OP_WRITE
        self.data: int | None = 0
        self.stretch: int = 0
        self.ack_err: int | None = None

        self.add_rand("addr", list(range(1 << ADDR_WIDTH)))
        self.add_rand("data", list(range(1 << DATA_WIDTH)))
        # bounds are read at solve time so instance overrides apply
        self.add_constraint(
            lambda addr: self.addr_constraint[0] <= addr <= self.addr_constraint[1]
        )
        self.add_constraint(
            lambda data: self.data_constraint[0] <= data <= self.data_constraint[1]
        )

    def randomize_with(self, *constraints: Callable[..., bool]) -> None:
        """Solve addr/data under the class constraints plus constraints.

        Raises:
            RandomizationError: If no addr/data pair satisfies all of them.
        """
        try:
            Randomized.randomize_with(self, *constraints)
        except Exception as exc:  # cocotb_coverage raises a bare Exception
            raise RandomizationError(
                f"{self.get_name()}: no solution with addr in "
                f"{self.addr_constraint} and data in {self.data_constraint}: {exc}"
            ) from exc


def within(
    addr_range: tuple[int, int], data_range: tuple[int, int]
) -> Callable[[int, int], bool]:
    """Inline addr/data constraint for randomize_with()."""
    a_lo, a_hi = addr_range
    d_lo, d_hi = data_range
    return lambda addr, data: a_lo <= addr <= a_hi and d_lo <= data <= d_hi
