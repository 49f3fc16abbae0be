# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/shared/dv/utils_dv.py

"""ConfigDB, signal and log-level helpers shared by the i2c bench components.

Knobs travel from the test to the components through pyuvm's ConfigDB:

    publish(test, "*", "stretch_hold_ticks", 1200)      # build_phase
    self.hold = lookup(self, "stretch_hold_ticks", 1200)  # end_of_elaboration
    self.bus = require(self, "bus_if")

Signals are reached with dut_signal() and read with read_int(), which turns
an X/Z value into None instead of raising.
"""

from __future__ import annotations

import logging
import os
from typing import Any, TypeVar

import pyuvm
from cocotb.handle import SimHandleBase
from cocotb.types import Logic, LogicArray
from pyuvm import UVMConfigItemNotFound

V = TypeVar("V")


class ConfigKeyError(KeyError):
    """A component asked ConfigDB for a key no one published."""


def bench_log_level() -> int:
    """Level named by COCOTB_LOG_LEVEL, INFO when unset or unknown."""
    level = logging.getLevelName((os.getenv("COCOTB_LOG_LEVEL") or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def apply_log_level(target: pyuvm.uvm_component | logging.Logger) -> None:
    """Put a component, or a sequence's plain logger, at the run's level.

    Plain loggers get no handlers of their own; records go up to cocotb's.
    """
    if isinstance(target, logging.Logger):
        target.setLevel(bench_log_level())
        target.propagate = True
    else:
        target.set_logging_level(bench_log_level())


def _fetch(comp: pyuvm.uvm_component, key: str) -> Any:
    # pyuvm resolves the context path itself; the instance name stays empty
    return pyuvm.ConfigDB().get(comp, "", key)


def publish(ctx: pyuvm.uvm_component | None, inst: str, key: str, value: Any) -> None:
    """Make value visible under key to every component matching inst."""
    pyuvm.ConfigDB().set(ctx, inst, key, value)


def lookup(comp: pyuvm.uvm_component, key: str, default: V) -> V:
    """Published value of key, or default when missing or of another type.

    ConfigDB is looked up on each call; pyuvm resets it between tests.
    """
    try:
        value = _fetch(comp, key)
    except UVMConfigItemNotFound:
        return default
    if default is not None and type(value) is not type(default):
        comp.logger.warning(
            "ignoring %s=%r, expected %s", key, value, type(default).__name__
        )
        return default
    return value


def require(comp: pyuvm.uvm_component, key: str) -> Any:
    """Published value of key; ConfigKeyError when the test never set it."""
    try:
        return _fetch(comp, key)
    except UVMConfigItemNotFound as exc:
        raise ConfigKeyError(
            f"{comp.get_full_name()}: nothing published under {key!r}"
        ) from exc


def dut_signal(dut: Any, name: str) -> SimHandleBase:
    """Handle of dut.<name>; RuntimeError if the design has no such port."""
    handle = getattr(dut, name, None)
    if handle is None or not hasattr(handle, "value"):
        raise RuntimeError(f"design has no signal named {name!r}")
    return handle


def read_int(value: Logic | LogicArray) -> int | None:
    """Unsigned value of a sampled Logic/LogicArray, None while X or Z."""
    if not value.is_resolvable:
        return None
    if isinstance(value, Logic):
        return int(value)
    return value.to_unsigned()
