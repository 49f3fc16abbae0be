# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/utils.py

"""Helpers for the dv and dv-regress command-line tools."""

from __future__ import annotations

import logging
import random
import re
from pathlib import Path

_ANSI = {"red": "\033[31m", "green": "\033[32m"}
_ANSI_RESET = "\033[0m"
_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class NoColorFormatter(logging.Formatter):
    """Drops ANSI color sequences so log files stay plain text."""

    ANSI_ESCAPE = re.compile(r"\033\[[0-9;]*m")

    def format(self, record: logging.LogRecord) -> str:
        return self.ANSI_ESCAPE.sub("", super().format(record))


def configure_logger(verbosity: str = "info", log_file: Path | None = None) -> None:
    """Send root-logger records to the console and, if given, to log_file.

    Handlers from an earlier call are replaced, so calling twice does not
    print every record twice.
    """
    level = verbosity.upper()
    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    handlers[0].setFormatter(logging.Formatter(_LOG_FORMAT, _LOG_DATEFMT))
    if log_file is not None:
        to_file = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        to_file.setFormatter(NoColorFormatter(_LOG_FORMAT, _LOG_DATEFMT))
        handlers.append(to_file)
    for handler in handlers:
        handler.setLevel(level)
        root.addHandler(handler)


def read_srclist(infile: Path, root: Path) -> list[Path]:
    """Absolute HDL source paths listed in a srclist file, in order.

    Paths are relative to root. ``-f other.f`` is expanded in place; blank
    lines, ``//`` comments and other simulator switches are skipped.
    """
    sources: list[Path] = []
    for raw in infile.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("//"):
            continue
        if line.startswith("-f "):
            sources.extend(read_srclist((root / line[3:].strip()).resolve(), root))
        elif not line.startswith(("-", "+")):
            sources.append((root / line).resolve())
    return sources


def normalize_seed(rng: random.Random, s: str) -> int:
    """32-bit seed from decimal, 0x... hex, or 'rand'/'random'/'auto'.

    Raises:
        SystemExit: On anything else, with a message for the command line.
    """
    if s.lower() in {"rand", "random", "auto"}:
        return rng.getrandbits(32)
    try:
        return int(s, 0) & 0xFFFF_FFFF
    except ValueError as exc:
        raise SystemExit(
            f"[dv] Invalid seed '{s}'. Use decimal, 0x..., or 'random'."
        ) from exc


def green(s: str) -> str:
    return f"{_ANSI['green']}{s}{_ANSI_RESET}"


def red(s: str) -> str:
    return f"{_ANSI['red']}{s}{_ANSI_RESET}"
