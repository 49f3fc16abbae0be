# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/shared/dv/base_sequence.py

"""Fixed-length sequence base."""

from __future__ import annotations

import logging
from typing import Generic, Type, TypeVar, cast

import pyuvm

from . import utils_dv
from .base_item import BaseItem

T = TypeVar("T", bound=BaseItem)


class BaseSequence(pyuvm.uvm_sequence, Generic[T]):
    """Generates seq_len items, one sequencer handshake at a time.

    body() runs body_pre(), then for each index: make_item(), start_item(),
    set_item_inputs() and finish_item(), then body_post(). finish_item()
    returns only after the driver calls item_done(), so item N+1 is not
    generated until item N has been driven to completion.

    Items are created through the factory as BaseItem, so a test's type
    override decides the concrete class.

    Subclasses must implement:
        set_item_inputs(item, index): Randomize or pin the item's inputs
    """

    def __init__(self, name: str = "seq", seq_len: int = 1) -> None:
        super().__init__(name)
        self.logger: logging.Logger = logging.getLogger(f"uvm.{name}")
        utils_dv.apply_log_level(self.logger)
        self.sequencer: pyuvm.uvm_sequencer  # set by start()
        self.seq_len: int = max(1, int(seq_len))
        self._item_type: Type[T] | None = None

    async def body(self) -> None:
        self.logger.debug("body begin: %d item(s)", self.seq_len)
        await self.body_pre()
        for i in range(self.seq_len):
            item = self.make_item(i)
            await self.start_item(item)
            await self.set_item_inputs(item, i)
            await self.finish_item(item)
        await self.body_post()
        self.logger.debug("body end")

    async def body_pre(self) -> None:
        """Hook run before the first item."""

    def make_item(self, index: int) -> T:
        """New item named tr<index>, of the factory's override type."""
        if self._item_type is None:
            first = pyuvm.uvm_factory().create_object_by_type(
                BaseItem, name=f"tr{index}"
            )
            self._item_type = cast(Type[T], type(first))
            return cast(T, first)
        return self._item_type(f"tr{index}")

    async def set_item_inputs(self, item: T, index: int) -> None:
        raise NotImplementedError("Implement item randomization here")

    async def body_post(self) -> None:
        """Hook run after the last item is done."""
