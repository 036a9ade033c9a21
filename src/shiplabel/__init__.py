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

"""Shipping label generation and batch assembly."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from .config import load_app_config
from .core.errors import (
    BatchFailedError,
    EmptyBatchError,
    InvalidOrderError,
    LabelError,
    LabelFailure,
    OutputSinkError,
    PopupBlockedError,
    RenderFailure,
)
from .core.models import LabelRecord, Order
from .core.orders import coerce_order, load_orders, order_from_dict
from .labels.mapper import map_order_to_label
from .render import (
    BatchResult,
    LabelDocument,
    LabelService,
    assemble_batch,
    assemble_single,
    render_label,
)

OrderLike = Order | Mapping[str, object]


def _coerce_order(order: OrderLike) -> Order:
    return coerce_order(order)


def _service(service: LabelService | None) -> LabelService:
    return service or LabelService(load_app_config())


def generate_single_label(order: OrderLike, *, service: LabelService | None = None) -> bytes:
    return _service(service).single_document(_coerce_order(order)).data


def print_single_label(order: OrderLike, *, service: LabelService | None = None) -> Path:
    return _service(service).print_label(_coerce_order(order))


def generate_batch_labels(
    orders: Sequence[OrderLike],
    *,
    service: LabelService | None = None,
    cancel: Callable[[], bool] | None = None,
) -> BatchResult:
    return _service(service).batch_document(orders, cancel=cancel)


__all__ = [
    "BatchFailedError",
    "BatchResult",
    "EmptyBatchError",
    "InvalidOrderError",
    "LabelDocument",
    "LabelError",
    "LabelFailure",
    "LabelRecord",
    "LabelService",
    "Order",
    "OutputSinkError",
    "PopupBlockedError",
    "RenderFailure",
    "assemble_batch",
    "assemble_single",
    "generate_batch_labels",
    "generate_single_label",
    "load_orders",
    "map_order_to_label",
    "order_from_dict",
    "print_single_label",
    "render_label",
]
