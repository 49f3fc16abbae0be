# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/i2c_master/__init__.py

"""Serial-bus master controller bench.

Subpackages:
- rtl: Reference controller, target and top (SystemVerilog)
- dv: Verification bench (cocotb/pyuvm)
"""
