# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/shared/dv/base_item.py

"""Sequence item that renders its requested and observed fields as JSON."""

from __future__ import annotations

import json

import pyuvm


class BaseItem(pyuvm.uvm_sequence_item):
    """Item whose fields are listed in INPUTS (requested) and OUTPUTS (observed).

    Stimulus and observed items share one type; they differ only in which
    fields hold values, so both render the same way in logs.
    """

    INPUTS: tuple[str, ...] = ()
    OUTPUTS: tuple[str, ...] = ()

    def to_dict(self, fields: tuple[str, ...] | None = None) -> dict[str, object]:
        names = self.INPUTS + self.OUTPUTS if fields is None else fields
        return {f: getattr(self, f) for f in names}

    def inputs_str(self) -> str:
        return json.dumps(self.to_dict(self.INPUTS), sort_keys=True)

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)
