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

import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

from ...core.models import Order
from ...core.orders import (
    load_order_records,
    load_orders,
    order_records_from_json,
    orders_from_json,
)

BATCH_STATUSES = ("processing", "shipped", "delivered")


def _load_order_input(source: str) -> list[Order]:
    if source == "-":
        return orders_from_json(sys.stdin.buffer.read())
    path = Path(source).expanduser()
    if not path.is_file():
        raise FileNotFoundError(f"orders file not found: {path}")
    return load_orders(path)


def _load_order_records(source: str) -> list[object]:
    if source == "-":
        return order_records_from_json(sys.stdin.buffer.read())
    path = Path(source).expanduser()
    if not path.is_file():
        raise FileNotFoundError(f"orders file not found: {path}")
    return load_order_records(path)


def _load_single_order(source: str) -> Order:
    orders = _load_order_input(source)
    if len(orders) != 1:
        raise ValueError(f"expected exactly one order, got {len(orders)}")
    return orders[0]


def _record_status(record: object) -> str | None:
    if isinstance(record, Order):
        return record.status.lower()
    if isinstance(record, Mapping):
        value = record.get("status")
        if value is None or (isinstance(value, str) and not value.strip()):
            return "pending"
        return str(value).strip().lower()
    return None


def _filter_by_status(records: Sequence[object], statuses: Sequence[str]) -> list[object]:
    """Keep records whose status is wanted.

    Records without a readable status are kept so the batch reports them as failures.
    """
    if not statuses:
        return list(records)
    wanted = {status.strip().lower() for status in statuses}
    kept = []
    for record in records:
        current = _record_status(record)
        if current is None or current in wanted:
            kept.append(record)
    return kept
