# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/i2c_master/dv/i2c_master_env.py

"""Agent and environment for i2c_master (factory-first)."""

from __future__ import annotations

import pyuvm

from i2cbench.shared.dv import utils_dv

from .i2c_master_checker import I2cMasterChecker
from .i2c_master_coverage import I2cMasterCoverage
from .i2c_master_driver import I2cMasterDriver
from .i2c_master_monitor import I2cMasterMonitor
from .i2c_master_sb import I2cMasterSb
from .i2c_master_sequence import I2cMasterSequencer


class I2cMasterAgent(pyuvm.uvm_agent):
    """Sequencer, driver and completion monitor for one controller.

    The driver and sequencer are only built when the agent is active.

    Components:
        sqr: Sequencer (queue A, sequence -> driver)
        drv: Driver
        mon: Completion monitor, published on ap

    Reference:
        https://github.com/paradigm-works/uvmtb_template/blob/main/tb_agent.svh
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.apply_log_level(self)
        self.ap: pyuvm.uvm_analysis_port
        self.sqr: I2cMasterSequencer
        self.drv: I2cMasterDriver
        self.mon: I2cMasterMonitor

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        super().build_phase()
        create = pyuvm.uvm_factory().create_component_by_type
        parent_inst_path = self.get_full_name()
        if self.is_active == pyuvm.uvm_active_passive_enum.UVM_ACTIVE:
            self.sqr = create(
                I2cMasterSequencer,
                parent_inst_path=parent_inst_path,
                name="sqr",
                parent=self,
            )
            self.drv = create(
                I2cMasterDriver,
                parent_inst_path=parent_inst_path,
                name="drv",
                parent=self,
            )
        self.mon = create(
            I2cMasterMonitor, parent_inst_path=parent_inst_path, name="mon", parent=self
        )
        self.ap = pyuvm.uvm_analysis_port("ap", self)
        self.logger.debug("build_phase end")

    def connect_phase(self) -> None:
        self.logger.debug("connect_phase begin")
        super().connect_phase()
        if self.is_active == pyuvm.uvm_active_passive_enum.UVM_ACTIVE:
            self.drv.seq_item_port.connect(self.sqr.seq_item_export)
        self.mon.ap.connect(self.ap)
        self.logger.debug("connect_phase end")


class I2cMasterEnv(pyuvm.uvm_env):
    """Builds the agent, scoreboard, coverage and checker and wires them.

    Monitor items go to the scoreboard's analysis FIFO (queue B) and to
    coverage.

    Components:
        agent: I2cMasterAgent
        sb: I2cMasterSb (always built)
        cov: I2cMasterCoverage (when coverage_en)
        chk: I2cMasterChecker (when check_en)

    Configuration (via config_db):
        coverage_en (bool): Build coverage (default: True)
        check_en (bool): Build the protocol checker (default: True)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.apply_log_level(self)
        self.agent: I2cMasterAgent
        self.sb: I2cMasterSb
        self.cov: I2cMasterCoverage | None = None
        self.chk: I2cMasterChecker | None = None
        self._coverage_en: bool = True
        self._check_en: bool = True

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        super().build_phase()

        create = pyuvm.uvm_factory().create_component_by_type
        parent_inst_path = self.get_full_name()

        self.agent = create(
            I2cMasterAgent, parent_inst_path=parent_inst_path, name="agent", parent=self
        )
        self.sb = create(
            I2cMasterSb, parent_inst_path=parent_inst_path, name="sb", parent=self
        )

        self._coverage_en = utils_dv.lookup(self, "coverage_en", self._coverage_en)
        if self._coverage_en:
            self.cov = create(
                I2cMasterCoverage,
                parent_inst_path=parent_inst_path,
                name="coverage",
                parent=self,
            )

        self._check_en = utils_dv.lookup(self, "check_en", self._check_en)
        if self._check_en:
            self.chk = create(
                I2cMasterChecker,
                parent_inst_path=parent_inst_path,
                name="checker",
                parent=self,
            )

        self.logger.debug("build_phase end")

    def connect_phase(self) -> None:
        self.logger.debug("connect_phase begin")
        super().connect_phase()
        self.agent.ap.connect(self.sb.fifo.analysis_export)
        if self.cov is not None:
            self.agent.ap.connect(self.cov.analysis_export)
        self.logger.debug("connect_phase end")
