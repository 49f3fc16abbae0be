# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/__init__.py

"""i2cbench: conformance benches for clocked serial-bus master controllers.

The package drives an I2C-like master controller (7-bit addressing, write/read,
acknowledgement, clock stretching) through a four-stage verification pipeline
built on cocotb and pyuvm:

    sequence (generator) -> driver -> controller -> monitor -> scoreboard

Main Components:

shared.dv:
    Bench infrastructure shared by every design: config_db and plusarg
    helpers, clock/reset drivers, item/sequence/test base classes.

i2c_master:
    The bench for the serial-bus master controller, plus a small reference
    RTL controller used to exercise the bench.

tools:
    ``dv`` and ``dv-regress`` command-line runners (cocotb runner).

utils:
    Logging, color, srclist and seed helpers used by the tools.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

try:
    __version__ = pkg_version("i2cbench")
except PackageNotFoundError:
    __version__ = "0+local"
