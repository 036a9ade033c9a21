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

# Physical label template.
LABEL_WIDTH_MM = 100.0
LABEL_HEIGHT_MM = 150.0

# Batch page.
A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0

# CSS reference resolution used by the HTML template.
CSS_DPI = 96
MM_PER_INCH = 25.4

# Relative tolerance when comparing raster and label aspect ratios.
ASPECT_TOLERANCE = 0.01


def mm_to_css_px(mm: float) -> float:
    return mm * CSS_DPI / MM_PER_INCH


def label_css_size_px() -> tuple[int, int]:
    return (
        math.ceil(mm_to_css_px(LABEL_WIDTH_MM)),
        math.ceil(mm_to_css_px(LABEL_HEIGHT_MM)),
    )


def centered_origin(
    page_w: float,
    page_h: float,
    item_w: float = LABEL_WIDTH_MM,
    item_h: float = LABEL_HEIGHT_MM,
) -> tuple[float, float]:
    if item_w > page_w or item_h > page_h:
        raise ValueError("label does not fit on the page")
    return (page_w - item_w) / 2, (page_h - item_h) / 2


def aspect_matches(width_px: int, height_px: int) -> bool:
    if width_px <= 0 or height_px <= 0:
        return False
    expected = LABEL_WIDTH_MM / LABEL_HEIGHT_MM
    return abs(width_px / height_px - expected) <= expected * ASPECT_TOLERANCE


__all__ = [
    "A4_HEIGHT_MM",
    "A4_WIDTH_MM",
    "CSS_DPI",
    "LABEL_HEIGHT_MM",
    "LABEL_WIDTH_MM",
    "aspect_matches",
    "centered_origin",
    "label_css_size_px",
    "mm_to_css_px",
]
