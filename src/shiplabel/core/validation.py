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

import math
import unicodedata
from collections.abc import Iterable
from typing import Any


def require_list(value: object, min_length: int, *, label: str) -> list[Any] | tuple[Any, ...]:
    """Validate that value is a list/tuple with at least min_length elements."""
    if not isinstance(value, (list, tuple)) or len(value) < min_length:
        raise ValueError(f"{label} must be a list")
    return value


def require_dict(value: object, *, label: str) -> dict[Any, Any]:
    """Validate that value is a dict."""
    if not isinstance(value, dict):
        raise ValueError(f"{label} must be a dict")
    return value


def require_keys(mapping: dict[Any, Any], keys: Iterable[str], *, label: str) -> None:
    """Validate that all keys are present in mapping."""
    for key in keys:
        if key not in mapping:
            raise ValueError(f"{label} {key} is required")


def normalize_text(value: object, *, label: str) -> str:
    """Normalize a string to Unicode NFC and strip surrounding whitespace."""
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a string")
    return unicodedata.normalize("NFC", value).strip()


def optional_text(value: object, *, label: str) -> str | None:
    """Like normalize_text, but None and blank strings become None."""
    if value is None:
        return None
    text = normalize_text(value, label=label)
    return text or None


def require_positive_int(value: object, *, label: str) -> int:
    """Validate that value is a positive integer (> 0)."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{label} must be a positive int")
    return value


def require_number(value: object, *, label: str) -> float:
    """Validate that value is a finite int or float (bools rejected)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{label} must be a number")
    if not math.isfinite(value):
        raise ValueError(f"{label} must be a finite number")
    return value
