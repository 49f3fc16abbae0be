# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/i2c_master/dv/i2c_master_rules.py

"""Simulator-free rules for the i2c_master bench.

Everything in here works on plain ints sampled once per clock tick, so the
bench components stay thin and the rules can be unit tested with pytest
without a simulator.

Contents:
    Constants: operation codes, default signal map, default bounds
    Signal map: parse_signal_map()
    Errors: RandomizationError
    Sampling: EdgeDetector, StickyBit
    Adjudication: Verdict, classify(), select_data()
    Checker rules: StartStrobeRule, StretchWindowTracker
"""

from __future__ import annotations

import enum

OP_WRITE = 0
OP_READ = 1

ADDR_WIDTH = 7
DATA_WIDTH = 8

DEFAULT_ACK_STATE_CODE = 3
DEFAULT_STRETCH_HOLD_TICKS = 1200

# Class-level constraints
DEFAULT_ADDR_RANGE: tuple[int, int] = (0, 10)
DEFAULT_DATA_RANGE: tuple[int, int] = (0, 255)

# Generator-level ranges
DEFAULT_GEN_ADDR_RANGE: tuple[int, int] = (0, 10)
DEFAULT_GEN_DATA_RANGE: tuple[int, int] = (1, 5)

# Stretch flags of the default two-shape script
DEFAULT_STRETCH_SCRIPT: tuple[bool, ...] = (False, True)

# role -> DUT signal name
DEFAULT_SIGNAL_MAP: dict[str, str] = {
    "newd": "newd",
    "op": "op",
    "addr": "addr",
    "din": "din",
    "stretch": "stretch",
    "dout": "dout",
    "busy": "busy",
    "ack_err": "ack_err",
    "done": "done",
    "dbg_state": "dbg_state",
}

STIMULUS_ROLES: tuple[str, ...] = ("newd", "op", "addr", "din", "stretch")
RESPONSE_ROLES: tuple[str, ...] = ("dout", "busy", "ack_err", "done")
DEBUG_ROLES: tuple[str, ...] = ("dbg_state",)

IDLE_STIMULUS: dict[str, int] = {
    "newd": 0,
    "op": OP_WRITE,
    "addr": 0,
    "din": 0,
    "stretch": 0,
}


def parse_signal_map(text: str) -> dict[str, str]:
    """Parse "role=name,role=name" into a role->name dict.

    >>> parse_signal_map("newd=start, dout=rdata")
    {'newd': 'start', 'dout': 'rdata'}
    """
    out: dict[str, str] = {}
    for tok in text.replace(" ", "").split(","):
        if not tok:
            continue
        role, sep, name = tok.partition("=")
        if not sep or not role or not name:
            raise ValueError(f"bad signal map entry {tok!r}, expected role=name")
        if role not in DEFAULT_SIGNAL_MAP:
            raise ValueError(f"unknown bus role {role!r}")
        out[role] = name
    return out


class RandomizationError(RuntimeError):
    """Raised when an item's constraints leave no legal addr/data."""


def _bit(value: int | None) -> int:
    # X/Z (None) reads as 0
    return 1 if value else 0


class EdgeDetector:
    """Compare a one-bit signal against its value on the previous tick."""

    def __init__(self, initial: int = 0) -> None:
        self.prev: int = _bit(initial)
        self.rose: bool = False
        self.fell: bool = False

    def update(self, value: int | None) -> bool:
        """Record this tick's value; return True on a 0->1 transition."""
        cur = _bit(value)
        self.rose = cur == 1 and self.prev == 0
        self.fell = cur == 0 and self.prev == 1
        self.prev = cur
        return self.rose


class StickyBit:
    """Latches high once it sees a 1, until take() reads and clears it."""

    def __init__(self) -> None:
        self._value: int = 0

    def update(self, value: int | None) -> None:
        if value:
            self._value = 1

    def take(self) -> int:
        v = self._value
        self._value = 0
        return v


class Verdict(enum.Enum):
    PASS = "PASS"
    FAIL = "FAIL"


def classify(ack_err: int | None) -> Verdict:
    """FAIL iff the acknowledgement-failure flag is set.

    An unresolvable (X/Z) flag is not a set flag.
    """
    return Verdict.FAIL if ack_err else Verdict.PASS


def select_data(op: int | None, din: int | None, dout: int | None) -> int | None:
    """The data a transfer carried: input register for writes, output for reads."""
    return din if op == OP_WRITE else dout


class StartStrobeRule:
    """Start strobe must rise only from idle and stay high for one tick."""

    def __init__(self) -> None:
        self._newd = EdgeDetector()
        self._prev_busy: int = 0
        self._width: int = 0
        self.strobes: int = 0
        self.violations: list[str] = []

    def sample(self, tick: int, newd: int | None, busy: int | None) -> list[str]:
        """Feed one tick; return the violations found on this tick."""
        found: list[str] = []
        self._newd.update(newd)
        if self._newd.rose:
            self.strobes += 1
            self._width = 1
            if self._prev_busy:
                found.append(f"tick {tick}: start strobe rose while busy")
        elif self._newd.prev:
            self._width += 1
        elif self._newd.fell and self._width != 1:
            found.append(
                f"tick {tick}: start strobe was high for {self._width} ticks, "
                "expected 1"
            )
        self._prev_busy = _bit(busy)
        self.violations.extend(found)
        return found


class StretchWindowTracker:
    """Stretch-hold windows open right after the acknowledge-state entry tick
    and last exactly hold_ticks ticks."""

    def __init__(
        self,
        ack_state_code: int = DEFAULT_ACK_STATE_CODE,
        hold_ticks: int = DEFAULT_STRETCH_HOLD_TICKS,
    ) -> None:
        if hold_ticks <= 0:
            raise ValueError(f"hold_ticks must be > 0, got {hold_ticks}")
        self.ack_state_code = ack_state_code
        self.hold_ticks = hold_ticks
        self._stretch = EdgeDetector()
        self._prev_state: int | None = None
        self._prev_entered: bool = False
        self._len: int = 0
        self.windows: int = 0
        self.lengths: list[int] = []
        self.violations: list[str] = []

    @property
    def open(self) -> bool:
        """A window is in progress (stretch high on the last tick)."""
        return self._stretch.prev == 1

    @property
    def open_ticks(self) -> int:
        """Length so far of the window in progress, 0 when none is."""
        return self._len if self.open else 0

    def sample(self, tick: int, state: int | None, stretch: int | None) -> list[str]:
        """Feed one tick; return the violations found on this tick."""
        found: list[str] = []
        entered = state == self.ack_state_code and self._prev_state != state
        self._stretch.update(stretch)
        if self._stretch.rose:
            self.windows += 1
            self._len = 1
            if not self._prev_entered:
                found.append(
                    f"tick {tick}: stretch rose without acknowledge-state "
                    f"entry ({self.ack_state_code}) on the previous tick"
                )
        elif self._stretch.prev:
            self._len += 1
        elif self._stretch.fell:
            self.lengths.append(self._len)
            if self._len != self.hold_ticks:
                found.append(
                    f"tick {tick}: stretch held {self._len} ticks, "
                    f"expected {self.hold_ticks}"
                )
        self._prev_state = state
        self._prev_entered = entered
        self.violations.extend(found)
        return found
