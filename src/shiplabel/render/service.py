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

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from ..config import AppConfig
from ..core.models import LabelRecord, Order
from ..labels.mapper import map_order_to_label
from ..output.dispatch import DownloadSink, PrintSink
from ..output.names import single_label_filename
from .assemble import BatchResult, LabelDocument, assemble_batch, assemble_single
from .rasterize import PlaywrightRasterizer, RasterImage, Rasterizer
from .surface import VisualSurface, render_label

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LabelService:
    config: AppConfig
    rasterizer: Rasterizer = field(default_factory=PlaywrightRasterizer)
    today: Callable[[], date] = date.today

    def label_record(self, order: Order) -> LabelRecord:
        return map_order_to_label(
            order,
            sender=self.config.sender,
            org_tag=self.config.label.org_tag,
            today=self.today(),
        )

    def surface(self, order: Order) -> VisualSurface:
        return render_label(self.label_record(order), config=self.config)

    def raster(self, order: Order) -> RasterImage:
        surface = self.surface(order)
        return self.rasterizer.rasterize(surface, self.config.render.scale_factor)

    def single_document(self, order: Order) -> LabelDocument:
        record = self.label_record(order)
        surface = render_label(record, config=self.config)
        raster = self.rasterizer.rasterize(surface, self.config.render.scale_factor)
        return assemble_single(raster, filename=single_label_filename(record.order_number))

    def batch_document(
        self,
        orders: Sequence[object],
        *,
        cancel: Callable[[], bool] | None = None,
        on_progress: Callable[[int], None] | None = None,
    ) -> BatchResult:
        logger.info("rendering batch of %d label(s)", len(orders))
        result = assemble_batch(
            orders,
            self.raster,
            today=self.today(),
            cancel=cancel,
            per_label_timeout=self.config.render.per_label_timeout,
            on_progress=on_progress,
        )
        logger.info(
            "batch finished: %d succeeded, %d failed",
            len(result.succeeded),
            len(result.failures),
        )
        return result

    def download_single(self, order: Order, directory: str | Path | None = None) -> Path:
        document = self.single_document(order)
        return DownloadSink(self._output_dir(directory)).deliver(document)

    def download_batch(
        self,
        orders: Sequence[object],
        directory: str | Path | None = None,
        *,
        cancel: Callable[[], bool] | None = None,
        on_progress: Callable[[int], None] | None = None,
    ) -> tuple[Path, BatchResult]:
        result = self.batch_document(orders, cancel=cancel, on_progress=on_progress)
        path = DownloadSink(self._output_dir(directory)).deliver(result.document)
        return path, result

    def print_label(self, order: Order, sink: PrintSink | None = None) -> Path:
        sink = sink or PrintSink(delay_ms=self.config.printing.delay_ms)
        return sink.deliver(self.surface(order))

    def _output_dir(self, directory: str | Path | None) -> Path:
        if directory:
            return Path(directory)
        if self.config.output.directory:
            return Path(self.config.output.directory).expanduser()
        return Path.cwd()
