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

import io
import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any, Literal, cast

from fpdf import FPDF

from ..core.errors import (
    BatchFailedError,
    EmptyBatchError,
    InvalidOrderError,
    LabelFailure,
    RenderFailure,
)
from ..core.models import Order
from ..core.orders import coerce_order, record_id
from ..output.names import batch_filename
from .geometry import (
    A4_HEIGHT_MM,
    A4_WIDTH_MM,
    LABEL_HEIGHT_MM,
    LABEL_WIDTH_MM,
    aspect_matches,
    centered_origin,
)
from .rasterize import RasterImage

logger = logging.getLogger(__name__)

DocumentMode = Literal["single", "batch"]

CANCELLED_REASON = "cancelled"
BUDGET_EXCEEDED_REASON = "batch time budget exceeded"


@dataclass(frozen=True)
class LabelDocument:
    data: bytes
    mode: DocumentMode
    page_count: int
    page_size_mm: tuple[float, float]
    filename: str


@dataclass(frozen=True)
class BatchResult:
    document: LabelDocument
    succeeded: tuple[str, ...]
    failures: tuple[LabelFailure, ...]

    @property
    def data(self) -> bytes:
        return self.document.data


def _new_pdf(page_size_mm: tuple[float, float]) -> FPDF:
    pdf = FPDF(orientation="portrait", unit="mm", format=cast(Any, page_size_mm))
    pdf.set_auto_page_break(False)
    pdf.set_margin(0)
    pdf.set_creator("shiplabel")
    return pdf


def _place_label(pdf: FPDF, raster: RasterImage, *, x: float, y: float) -> None:
    if not aspect_matches(raster.width_px, raster.height_px):
        logger.warning(
            "raster %dx%d px does not match the 100:150 label aspect; stretching to fit",
            raster.width_px,
            raster.height_px,
        )
    pdf.image(io.BytesIO(raster.png), x=x, y=y, w=LABEL_WIDTH_MM, h=LABEL_HEIGHT_MM)


def _pdf_bytes(pdf: FPDF) -> bytes:
    return bytes(pdf.output())


def assemble_single(raster: RasterImage, *, filename: str) -> LabelDocument:
    page_size = (LABEL_WIDTH_MM, LABEL_HEIGHT_MM)
    pdf = _new_pdf(page_size)
    pdf.add_page()
    _place_label(pdf, raster, x=0.0, y=0.0)
    return LabelDocument(
        data=_pdf_bytes(pdf),
        mode="single",
        page_count=1,
        page_size_mm=page_size,
        filename=filename,
    )


def assemble_batch(
    orders: Sequence[object],
    render_one: Callable[[Order], RasterImage],
    *,
    today: date | None = None,
    cancel: Callable[[], bool] | None = None,
    per_label_timeout: float | None = None,
    on_progress: Callable[[int], None] | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> BatchResult:
    """Render each order onto its own A4 page, skipping orders that fail.

    Entries may be ``Order`` objects or raw order mappings; raw records are
    parsed per order, so a malformed record fails only its own page.
    ``render_one`` runs the rest of the per-order pipeline. Invalid orders
    and render failures are collected; the batch carries on. ``cancel`` is
    polled between orders only. With ``per_label_timeout`` set, the batch
    gets ``per_label_timeout * len(orders)`` seconds; orders not started
    within that budget are reported as failed. ``on_progress`` receives the
    number of orders processed so far.
    """
    if not orders:
        raise EmptyBatchError("batch requires at least one order")

    page_size = (A4_WIDTH_MM, A4_HEIGHT_MM)
    x, y = centered_origin(A4_WIDTH_MM, A4_HEIGHT_MM)
    pdf = _new_pdf(page_size)
    deadline = None
    if per_label_timeout:
        deadline = clock() + per_label_timeout * len(orders)

    succeeded: list[str] = []
    failures: list[LabelFailure] = []
    for index, entry in enumerate(orders):
        order_id = record_id(entry, index)
        stop_reason = None
        if cancel is not None and cancel():
            stop_reason = CANCELLED_REASON
        elif deadline is not None and clock() > deadline:
            stop_reason = BUDGET_EXCEEDED_REASON
        if stop_reason is not None:
            logger.warning(
                "batch stopped before order %s: %s (%d left)",
                order_id,
                stop_reason,
                len(orders) - index,
            )
            failures.extend(
                LabelFailure(record_id(rest, position), stop_reason)
                for position, rest in enumerate(orders[index:], start=index)
            )
            break

        try:
            raster = render_one(coerce_order(entry))
        except (InvalidOrderError, RenderFailure) as exc:
            logger.warning("skipping label for order %s: %s", order_id, exc)
            failures.append(LabelFailure(order_id=order_id, reason=str(exc)))
        else:
            pdf.add_page()
            _place_label(pdf, raster, x=x, y=y)
            succeeded.append(order_id)
            logger.debug("order %s placed on page %d", order_id, len(succeeded))
        if on_progress is not None:
            on_progress(index + 1)

    if not succeeded:
        raise BatchFailedError(failures)

    document = LabelDocument(
        data=_pdf_bytes(pdf),
        mode="batch",
        page_count=len(succeeded),
        page_size_mm=page_size,
        filename=batch_filename(today or date.today()),
    )
    return BatchResult(document=document, succeeded=tuple(succeeded), failures=tuple(failures))


__all__ = [
    "BUDGET_EXCEEDED_REASON",
    "BatchResult",
    "CANCELLED_REASON",
    "LabelDocument",
    "assemble_batch",
    "assemble_single",
]
