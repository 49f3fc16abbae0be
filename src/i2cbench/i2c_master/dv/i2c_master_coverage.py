# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/i2c_master/dv/i2c_master_coverage.py

"""Functional coverage of observed i2c_master transfers."""

from __future__ import annotations

import os

import pyuvm
from cocotb_coverage.coverage import CoverCross, CoverPoint, coverage_db

from i2cbench.shared.dv import utils_dv

from .i2c_master_item import I2cMasterItem
from .i2c_master_rules import DEFAULT_ADDR_RANGE, OP_READ, OP_WRITE


@CoverPoint(
    "top.i2c_master.addr",
    xf=lambda tr: tr.addr,
    bins=list(range(DEFAULT_ADDR_RANGE[0], DEFAULT_ADDR_RANGE[1] + 1)),
)
@CoverPoint("top.i2c_master.op", xf=lambda tr: tr.op, bins=[OP_WRITE, OP_READ])
@CoverPoint("top.i2c_master.stretch", xf=lambda tr: tr.stretch, bins=[0, 1])
@CoverPoint("top.i2c_master.ack", xf=lambda tr: int(bool(tr.ack_err)), bins=[0, 1])
@CoverCross(
    "top.i2c_master.stretch_x_ack",
    items=["top.i2c_master.stretch", "top.i2c_master.ack"],
)
def sample_transaction(tr: I2cMasterItem) -> None:
    """Feed one observed transaction to the coverpoints."""


class I2cMasterCoverage(pyuvm.uvm_subscriber):
    """Samples every observed transfer into the cover points above.

    Configuration (via config_db):
        coverage_en (bool): Sample and report (default: True)

    Environment Variables:
        COV_YAML: Also write the coverage database to this YAML file
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.apply_log_level(self)
        self.enabled: bool = True
        self.yaml_path: str | None = os.getenv("COV_YAML")
        self.total: int = 0
        self.stretched: int = 0
        self.nacked: int = 0

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self.enabled = utils_dv.lookup(self, "coverage_en", self.enabled)
        self.logger.debug("end_of_elaboration_phase end")

    def write(self, tt: I2cMasterItem) -> None:
        if not self.enabled:
            return
        self.total += 1
        self.stretched += int(bool(tt.stretch))
        self.nacked += int(bool(tt.ack_err))
        sample_transaction(tt)

    def report_phase(self) -> None:
        self.logger.debug("report_phase begin")
        super().report_phase()
        if not self.enabled:
            return
        coverage_db.report_coverage(self.logger.info, bins=False)
        if self.yaml_path:
            coverage_db.export_to_yaml(self.yaml_path)
            self.logger.info("coverage YAML written to %s", self.yaml_path)
        self.logger.info(
            "I2cMasterCoverage summary: total=%d stretched=%d nacked=%d",
            self.total,
            self.stretched,
            self.nacked,
        )
        self.logger.debug("report_phase end")
