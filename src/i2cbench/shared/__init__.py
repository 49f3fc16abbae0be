# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/i2cbench/shared/__init__.py

"""Code shared by every bench in the repository."""
