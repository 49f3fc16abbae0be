# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: tests/test_i2c_master_rules.py

"""Constraint, sampling, verdict and checker-rule logic without a simulator."""

from __future__ import annotations

import pytest

from i2cbench.i2c_master.dv.i2c_master_rules import (
    DEFAULT_SIGNAL_MAP,
    OP_READ,
    OP_WRITE,
    EdgeDetector,
    StartStrobeRule,
    StickyBit,
    StretchWindowTracker,
    Verdict,
    classify,
    parse_signal_map,
    select_data,
)

# --- signal map ---


def test_parse_signal_map():
    assert parse_signal_map("") == {}
    assert parse_signal_map("newd=start, dout=rdata,") == {
        "newd": "start",
        "dout": "rdata",
    }


@pytest.mark.parametrize("text", ["newd", "newd=", "=start", "bogus=x"])
def test_parse_signal_map_rejects_bad_entries(text):
    with pytest.raises(ValueError):
        parse_signal_map(text)


def test_default_signal_map_has_every_role():
    assert set(DEFAULT_SIGNAL_MAP) == {
        "newd",
        "op",
        "addr",
        "din",
        "stretch",
        "dout",
        "busy",
        "ack_err",
        "done",
        "dbg_state",
    }


# --- sampling ---


def test_edge_detector():
    ed = EdgeDetector()
    assert ed.update(0) is False
    assert ed.update(1) is True
    assert ed.update(1) is False
    assert ed.update(0) is False
    assert ed.fell is True


def test_edge_detector_treats_unresolved_as_low():
    ed = EdgeDetector()
    assert ed.update(None) is False
    assert ed.update(1) is True
    ed.update(None)
    assert ed.fell is True


def test_sticky_bit_latches_until_taken():
    sb = StickyBit()
    sb.update(0)
    assert sb.take() == 0
    sb.update(1)
    sb.update(None)
    sb.update(0)
    assert sb.take() == 1
    assert sb.take() == 0


# --- adjudication ---


def test_classify():
    assert classify(0) is Verdict.PASS
    assert classify(1) is Verdict.FAIL
    assert classify(None) is Verdict.PASS


def test_select_data():
    assert select_data(OP_WRITE, 3, 99) == 3
    assert select_data(OP_READ, 3, 99) == 99


# --- checker rules ---


def _run_strobe(rule, samples):
    found = []
    for tick, (newd, busy) in enumerate(samples):
        found += rule.sample(tick, newd, busy)
    return found


def test_start_strobe_single_tick_from_idle_is_clean():
    rule = StartStrobeRule()
    found = _run_strobe(rule, [(0, 0), (1, 0), (0, 1), (0, 1), (0, 0)])
    assert found == []
    assert rule.strobes == 1


def test_start_strobe_while_busy_is_flagged():
    rule = StartStrobeRule()
    found = _run_strobe(rule, [(0, 1), (1, 1), (0, 1)])
    assert len(found) == 1
    assert "while busy" in found[0]


def test_start_strobe_too_wide_is_flagged():
    rule = StartStrobeRule()
    found = _run_strobe(rule, [(0, 0), (1, 0), (1, 1), (1, 1), (0, 1)])
    assert len(found) == 1
    assert "3 ticks" in found[0]
    assert rule.violations == found


def _run_stretch(tracker, samples):
    found = []
    for tick, (state, stretch) in enumerate(samples):
        found += tracker.sample(tick, state, stretch)
    return found


def test_stretch_window_after_ack_entry_is_clean():
    t = StretchWindowTracker(ack_state_code=3, hold_ticks=4)
    samples = [(2, 0), (3, 0)] + [(3, 1)] * 4 + [(3, 0), (4, 0)]
    assert _run_stretch(t, samples) == []
    assert t.windows == 1
    assert t.lengths == [4]
    assert not t.open


def test_stretch_without_ack_entry_is_flagged():
    t = StretchWindowTracker(ack_state_code=3, hold_ticks=2)
    found = _run_stretch(t, [(2, 0), (2, 1), (2, 1), (2, 0)])
    assert len(found) == 1
    assert "acknowledge-state" in found[0]


def test_stretch_wrong_length_is_flagged():
    t = StretchWindowTracker(ack_state_code=3, hold_ticks=4)
    found = _run_stretch(t, [(2, 0), (3, 0), (3, 1), (3, 1), (3, 0)])
    assert t.lengths == [2]
    assert len(found) == 1
    assert "expected 4" in found[0]


def test_stretch_window_open_while_held():
    t = StretchWindowTracker(ack_state_code=3, hold_ticks=10)
    _run_stretch(t, [(2, 0), (3, 0), (3, 1), (3, 1)])
    assert t.open
    assert t.open_ticks == 2
    _run_stretch(t, [(3, 0)])
    assert not t.open
    assert t.open_ticks == 0


def test_stretch_tracker_rejects_non_positive_hold():
    with pytest.raises(ValueError):
        StretchWindowTracker(hold_ticks=0)
