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

"""Populate the shipping label template with a label record.

The template has fixed regions; nothing on the label grows with the data.
Long item lists are truncated: once the item count exceeds the number of
lines the contents box can hold, the last visible line is replaced by a
"+N more items" marker. Long single values are cut with an ellipsis by the
template's CSS.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from jinja2 import TemplateError

from ..config import DEFAULT_TEMPLATE_PATH, AppConfig, LabelDefaults
from ..core.errors import RenderFailure
from ..core.models import LabelLineItem, LabelRecord
from .geometry import CSS_DPI, LABEL_HEIGHT_MM, LABEL_WIDTH_MM, label_css_size_px
from .templating import render_template, template_version

logger = logging.getLogger(__name__)

LABEL_SELECTOR = ".label-container"


@dataclass(frozen=True)
class RegionLayout:
    ship_to_mm: float = 24.0
    ship_from_mm: float = 20.0
    contents_mm: float = 36.0
    contents_chrome_mm: float = 6.5
    item_line_mm: float = 4.2

    @property
    def item_capacity(self) -> int:
        return max(1, math.floor((self.contents_mm - self.contents_chrome_mm) / self.item_line_mm))


DEFAULT_LAYOUT = RegionLayout()


@dataclass(frozen=True)
class VisualSurface:
    html: str
    order_id: str
    order_number: str
    template_version: str
    width_mm: float = LABEL_WIDTH_MM
    height_mm: float = LABEL_HEIGHT_MM
    dpi: int = CSS_DPI
    selector: str = LABEL_SELECTOR

    @property
    def css_size_px(self) -> tuple[int, int]:
        return label_css_size_px()


@dataclass(frozen=True)
class VisibleItems:
    visible: tuple[LabelLineItem, ...]
    hidden: int


def visible_line_items(items: Sequence[LabelLineItem], max_lines: int) -> VisibleItems:
    if max_lines < 2:
        raise ValueError("max_lines must be at least 2")
    if len(items) <= max_lines:
        return VisibleItems(visible=tuple(items), hidden=0)
    shown = max_lines - 1
    return VisibleItems(visible=tuple(items[:shown]), hidden=len(items) - shown)


def placeholder_bars(order_number: str) -> str:
    # Visual filler only; the bars do not encode the order number.
    return " ".join("|" * (ord(char) % 4 + 2) for char in order_number)


def label_context(
    record: LabelRecord,
    *,
    defaults: LabelDefaults,
    layout: RegionLayout = DEFAULT_LAYOUT,
) -> dict[str, object]:
    max_lines = min(defaults.max_visible_items, layout.item_capacity)
    items = visible_line_items(record.line_items, max_lines)
    if items.hidden:
        logger.debug(
            "order %s: %d item(s) folded into overflow marker", record.order_id, items.hidden
        )
    return {
        "label": record,
        "items": items,
        "layout": layout,
        "barcode": {"bars": placeholder_bars(record.order_number)},
        "currency_symbol": defaults.currency_symbol,
        "handling_notice": defaults.handling_notice,
    }


def render_label(
    record: LabelRecord,
    *,
    config: AppConfig | None = None,
    template_path: str | Path | None = None,
    layout: RegionLayout = DEFAULT_LAYOUT,
) -> VisualSurface:
    defaults = config.label if config is not None else LabelDefaults()
    path = Path(
        template_path
        or (config.template_path if config is not None else DEFAULT_TEMPLATE_PATH)
    )
    try:
        version = template_version(path)
        context = label_context(record, defaults=defaults, layout=layout)
        context["template_version"] = version
        html = render_template(path, context)
    except (OSError, TemplateError) as exc:
        raise RenderFailure(
            f"order {record.order_id}: label template could not be populated: {exc}",
            order_id=record.order_id,
        ) from exc
    return VisualSurface(
        html=html,
        order_id=record.order_id,
        order_number=record.order_number,
        template_version=version,
    )


__all__ = [
    "DEFAULT_LAYOUT",
    "LABEL_SELECTOR",
    "RegionLayout",
    "VisibleItems",
    "VisualSurface",
    "label_context",
    "placeholder_bars",
    "render_label",
    "visible_line_items",
]
