# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/shared/dv/__init__.py

"""Shared design verification infrastructure.

Base classes and utilities for UVM-style benches built on cocotb and pyuvm.
Import from the defining module (``from i2cbench.shared.dv.base_driver import
BaseDriver``); the package itself imports nothing so that the simulator-free
helpers (utils_cli) load without cocotb or pyuvm.

Base Classes:
- BaseTest: Config publishing, clock/reset component, fixed-length run
- BaseDriver: Idle inputs, reset wait, item loop
- BaseMonitor: Per-tick sampling into an analysis port
- BaseSequence: Fixed-length item generator
- BaseItem: Item with JSON rendering of its input/output fields

Clock and Reset:
- TickMixin: drive on the falling edge, sample after the rising edge
- ClockResetDriver: clock generation and the power-on reset pulse

Utilities:
- utils_dv: ConfigDB, signal and log-level helpers
- utils_cli: env/plusarg settings
"""
