# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/tools/__init__.py

"""i2cbench command-line tools.

- dv: build the reference RTL and run one cocotb/pyuvm test module
- dv-regress: run a YAML-defined regression of dv jobs
"""
