# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/shared/dv/base_monitor.py

"""Base monitor sampling once per clock tick."""

from __future__ import annotations

from typing import Generic, TypeVar

import pyuvm

from . import utils_dv
from .tick_mixin import TickMixin
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class BaseMonitor(TickMixin, pyuvm.uvm_monitor, Generic[T]):
    """Passive monitor that samples on every sample edge and publishes items.

    Each tick the monitor waits for the rising edge plus the read-only region
    and calls sample_tick(). Whatever item it returns is written to the
    analysis port; None means nothing to publish on this tick.

    Subclasses must implement:
        sample_tick(tick): Look at the DUT and return an item or None

    Attributes:
        ap: Analysis port for broadcasting observed transactions
        item_count: Number of transactions published
        tick: Number of sample edges seen so far
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.apply_log_level(self)
        self._tick_init()
        self.ap: pyuvm.uvm_analysis_port
        self.item_count: int = 0
        self.tick: int = 0

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        super().build_phase()
        self.ap = pyuvm.uvm_analysis_port("ap", self)
        self.logger.debug("build_phase end")

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self._tick_bind()
        self.logger.debug("end_of_elaboration_phase end")

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        tr: T | None
        while True:
            await self.sample_edge()
            self.tick += 1
            tr = self.sample_tick(self.tick)
            if tr is not None:
                self.item_count += 1
                self.ap.write(tr)

    def sample_tick(self, tick: int) -> T | None:
        """Return the item observed on this tick (or None to skip)."""
        raise NotImplementedError("Implement sample_tick here")
