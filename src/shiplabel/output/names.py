#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import re
from datetime import date

SINGLE_PREFIX = "shipping-label"
BATCH_PREFIX = "shipping-labels-batch"
DEFAULT_EXTENSION = "pdf"

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9_-]")


def single_label_filename(order_number: str, *, ext: str = DEFAULT_EXTENSION) -> str:
    safe = _UNSAFE_CHARS_RE.sub("_", order_number)
    return f"{SINGLE_PREFIX}-{safe}.{ext}"


def batch_filename(day: date, *, ext: str = DEFAULT_EXTENSION) -> str:
    return f"{BATCH_PREFIX}-{day.isoformat()}.{ext}"
