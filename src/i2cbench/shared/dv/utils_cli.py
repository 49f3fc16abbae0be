# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/shared/dv/utils_cli.py

"""Command-line settings for bench configuration.

Bench knobs are read from the environment and from simulator plusargs, the way
the UVM command-line processor does it.

Configuration Precedence:
    1. Environment variables (NAME or I2CB_NAME)
    2. Plusargs (+NAME or +NAME=value)
    3. Default values

Plusargs Format:
    Boolean flags: +NAME (treated as True) or +NAME=1/0/true/false/yes/no
    String values: +NAME=value
    Integer values: +NAME=123 or +NAME=0x7B

Environment Variables:
    PLUSARGS, COCOTB_PLUSARGS, or I2CB_PLUSARGS: Space-separated plusargs
    Individual settings: NAME or I2CB_NAME (e.g., STRETCH_HOLD_TICKS=600)

Example:
    >>> hold = get_int_setting("STRETCH_HOLD_TICKS", 1200)
    >>> coverage_en = get_bool_setting("COVERAGE_EN", True)
"""

from __future__ import annotations

import os
from typing import Iterable

ENV_PREFIX = "I2CB_"

_TRUE_SET = {"1", "true", "yes", "y", "on"}
_FALSE_SET = {"0", "false", "no", "n", "off"}


def _parse_bool(s: str) -> bool | None:
    """Convert str to bool."""
    v = s.strip().lower()
    if v in _TRUE_SET:
        return True
    if v in _FALSE_SET:
        return False
    return None


def iter_plusargs() -> Iterable[str]:
    """Yield +args from the first non-empty plusarg env var."""
    s = (
        os.environ.get("PLUSARGS", "")
        or os.environ.get("COCOTB_PLUSARGS", "")
        or os.environ.get(f"{ENV_PREFIX}PLUSARGS", "")
    )
    return s.split()


def _get_plusarg(name: str) -> str | None:
    """Return the value of +NAME=val, '1' for a bare +NAME, else None."""
    prefix = f"+{name}="
    for tok in iter_plusargs():
        if tok.startswith(prefix):
            return tok[len(prefix) :]
        if tok == f"+{name}":
            return "1"
    return None


def _env_values(name: str) -> Iterable[str]:
    for key in (name, f"{ENV_PREFIX}{name}"):
        v = os.environ.get(key)
        if v is not None:
            yield v


def get_bool_setting(name: str, default: bool) -> bool:
    """
    Resolve a boolean setting with precedence: env > plusarg > default.
    bare +NAME is treated as True
    """
    for v in _env_values(name):
        parsed = _parse_bool(v)
        if parsed is not None:
            return parsed
    v = _get_plusarg(name)
    if v is not None:
        parsed = _parse_bool(v)
        if parsed is not None:
            return parsed
    return default


def get_str_setting(name: str, default: str) -> str:
    """Resolve a string setting: env > plusarg > default (always returns str)."""
    for v in _env_values(name):
        return v
    v = _get_plusarg(name)
    return v if v is not None else default


def get_int_setting(name: str, default: int) -> int:
    """Resolve an int setting: env > plusarg > default (always returns int)."""
    for v in _env_values(name):
        try:
            return int(v, 0)  # supports 0x/0o/0b prefixes
        except ValueError:
            continue  # try the I2CB_ variant, then fall through to plusarg/default
    v = _get_plusarg(name)
    if v is not None:
        try:
            return int(v, 0)
        except ValueError:
            pass
    return default


def get_range_setting(
    name_min: str, name_max: str, default: tuple[int, int]
) -> tuple[int, int]:
    """Resolve an inclusive (lo, hi) pair from two int settings."""
    lo = get_int_setting(name_min, default[0])
    hi = get_int_setting(name_max, default[1])
    if lo > hi:
        raise ValueError(f"{name_min}={lo} must be <= {name_max}={hi}")
    return lo, hi
