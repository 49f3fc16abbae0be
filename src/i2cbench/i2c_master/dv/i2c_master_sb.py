# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/i2c_master/dv/i2c_master_sb.py

"""In-order PASS/FAIL scoreboard for i2c_master."""

from __future__ import annotations

import pyuvm

from i2cbench.shared.dv import utils_dv

from .i2c_master_item import I2cMasterItem
from .i2c_master_rules import Verdict, classify


class I2cMasterSb(pyuvm.uvm_scoreboard):
    """Adjudicates observed transactions in arrival order.

    Observed items arrive on fifo (an analysis FIFO fed by the monitor) and are
    classified one at a time: FAIL when ack_err is set, PASS otherwise. There
    is no expected stream; stimulus and observation line up by order only.

    Statistics:
        vect_cnt: Items adjudicated
        pass_cnt: Items that passed
        err_cnt: Items that failed
        verdicts: Verdict per item, in arrival order
        observed: to_dict() of every item, in arrival order
        failures: to_dict() of each failed item

    Configuration (via config_db):
        sb_fail_on_error (bool): Raise in final_phase if any item failed
                                 (default: False)

    Reference:
        C.E. Cummings, "OVM/UVM Scoreboards - Fundamental Architectures,"
        SNUG 2013 (Silicon Valley)
    """

    def __init__(self, name: str, parent: pyuvm.uvm_component | None) -> None:
        super().__init__(name, parent)
        utils_dv.apply_log_level(self)
        self.fifo: pyuvm.uvm_tlm_analysis_fifo
        self.fail_on_error: bool = False
        self.clear_stats()

    def clear_stats(self) -> None:
        self.vect_cnt: int = 0
        self.pass_cnt: int = 0
        self.err_cnt: int = 0
        self.verdicts: list[Verdict] = []
        self.observed: list[dict[str, object]] = []
        self.failures: list[dict[str, object]] = []

    def build_phase(self) -> None:
        self.logger.debug("build_phase begin")
        super().build_phase()
        self.fifo = pyuvm.uvm_tlm_analysis_fifo("fifo", self)
        self.logger.debug("build_phase end")

    def end_of_elaboration_phase(self) -> None:
        self.logger.debug("end_of_elaboration_phase begin")
        super().end_of_elaboration_phase()
        self.fail_on_error = utils_dv.lookup(
            self, "sb_fail_on_error", self.fail_on_error
        )
        self.logger.debug("end_of_elaboration_phase end")

    async def run_phase(self) -> None:
        self.logger.debug("run_phase begin")
        while True:
            tr: I2cMasterItem = await self.fifo.get()
            self.check_item(tr)

    def check_item(self, tr: I2cMasterItem) -> Verdict:
        self.vect_cnt += 1
        verdict = classify(tr.ack_err)
        self.verdicts.append(verdict)
        self.observed.append(tr.to_dict())
        if verdict is Verdict.FAIL:
            self.err_cnt += 1
            self.failures.append(tr.to_dict())
            self.logger.error("FAIL addr=%s op=%s", tr.addr, tr.op)
        else:
            self.pass_cnt += 1
            self.logger.info(
                "PASS addr=%s op=%s data=%s stretch=%s",
                tr.addr,
                tr.op,
                tr.data,
                tr.stretch,
            )
        return verdict

    def report_phase(self) -> None:
        self.logger.debug("report_phase begin")
        if self.err_cnt == 0:
            self.logger.info(
                "*** SCOREBOARD - %d observed, %d passed ***",
                self.vect_cnt,
                self.pass_cnt,
            )
        else:
            self.logger.error(
                "*** SCOREBOARD - %d observed, %d passed, %d failed ***",
                self.vect_cnt,
                self.pass_cnt,
                self.err_cnt,
            )
        self.logger.debug("report_phase end")

    def final_phase(self) -> None:
        self.logger.debug("final_phase begin")
        if self.fail_on_error and self.err_cnt > 0:
            raise AssertionError(
                f"Scoreboard saw {self.err_cnt} failure(s); sb_fail_on_error is enabled"
            )
        self.logger.debug("final_phase end")
