# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_utils.py

from __future__ import annotations

import logging
import random
from pathlib import Path

import pytest

from i2cbench import utils


def test_read_srclist_skips_comments_and_switches(tmp_path):
    (tmp_path / "rtl").mkdir()
    (tmp_path / "rtl" / "inner.f").write_text("rtl/b.sv\n", encoding="utf-8")
    (tmp_path / "srclist.f").write_text(
        "// header\n\n+incdir+rtl\n-y lib\nrtl/a.sv\n-f rtl/inner.f\n  rtl/c.sv  \n",
        encoding="utf-8",
    )
    got = utils.read_srclist(tmp_path / "srclist.f", tmp_path)
    assert got == [
        (tmp_path / "rtl" / "a.sv").resolve(),
        (tmp_path / "rtl" / "b.sv").resolve(),
        (tmp_path / "rtl" / "c.sv").resolve(),
    ]


def test_i2c_master_srclist_files_exist():
    pkg = Path(utils.__file__).resolve().parent
    sources = utils.read_srclist(pkg / "i2c_master" / "rtl" / "srclist.f", pkg)
    assert [s.name for s in sources] == [
        "i2c_master_core.sv",
        "i2c_target.sv",
        "i2c_master.sv",
    ]
    assert all(s.is_file() for s in sources)


def test_normalize_seed():
    rng = random.Random(0)
    assert utils.normalize_seed(rng, "42") == 42
    assert utils.normalize_seed(rng, "0x10") == 16
    assert utils.normalize_seed(rng, str(2**32 + 5)) == 5
    assert 0 <= utils.normalize_seed(rng, "random") < 2**32
    with pytest.raises(SystemExit):
        utils.normalize_seed(rng, "seven")


def test_no_color_formatter_strips_ansi():
    fmt = utils.NoColorFormatter("%(message)s")
    record = logging.LogRecord("t", logging.INFO, __file__, 1, utils.red("FAIL"), None, None)
    assert fmt.format(record) == "FAIL"


def test_configure_logger_writes_plain_file(tmp_path):
    log_file = tmp_path / "run.log"
    root = logging.getLogger()
    saved_level = root.level
    saved_handlers = list(root.handlers)
    utils.configure_logger("info", log_file)
    try:
        logging.getLogger("i2cbench.test").info("%s done", utils.green("PASS"))
        for h in logging.getLogger().handlers:
            h.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "PASS done" in text
        assert "\033[" not in text
    finally:
        for h in list(root.handlers):
            h.close()
            root.removeHandler(h)
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
