# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/i2c_master/dv/__init__.py

"""Design verification bench for i2c_master.

Components:
- i2c_master_rules: Simulator-free constraints, edge and checker rules
- i2c_master_bus_if: Bus interface and debug port objects
- i2c_master_item: Transaction item
- i2c_master_sequence: Sequencer and the stretch-script sequence
- i2c_master_driver: Drives start strobe, operands and stretch-hold line
- i2c_master_monitor: Rebuilds observed transactions on done edges
- i2c_master_sb: In-order PASS/FAIL scoreboard
- i2c_master_coverage: Functional coverage collection
- i2c_master_checker: Passive protocol checker
- i2c_master_env: Agent and environment
- test_i2c_master: pyuvm tests

To run tests:
    dv --design=i2c_master --test=test_i2c_master
    dv-regress --file=src/i2cbench/i2c_master/dv/dv_regress.yaml
"""
