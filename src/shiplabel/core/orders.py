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

"""Parse order records handed over by the order-management collaborator.

Records use the collaborator's camelCase JSON keys. Parsing is structural
only: an order with no items or a partial address still parses, and the
label mapper decides whether it can be labelled.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

from .errors import InvalidOrderError
from .models import Order, OrderItem, ShippingAddress
from .validation import (
    normalize_text,
    optional_text,
    require_dict,
    require_keys,
    require_list,
    require_number,
    require_positive_int,
)

_REQUIRED_KEYS = ("id", "customerName", "customerEmail", "items", "totalAmount", "createdAt")


def order_from_dict(data: object) -> Order:
    order_id = data.get("id") if isinstance(data, dict) else None
    try:
        return _parse_order(data)
    except ValueError as exc:
        raise InvalidOrderError(
            f"order {order_id or '<unknown>'}: {exc}",
            order_id=order_id if isinstance(order_id, str) else None,
        ) from exc


def coerce_order(record: object) -> Order:
    if isinstance(record, Order):
        return record
    if isinstance(record, Mapping):
        return order_from_dict(dict(record))
    return order_from_dict(record)


def record_id(record: object, index: int) -> str:
    """Best-effort identifier for failure reports, even for unparseable records."""
    if isinstance(record, Order):
        return record.id
    if isinstance(record, Mapping):
        value = record.get("id")
        if isinstance(value, str) and value.strip():
            return value.strip()
    return f"<record {index}>"


def order_records_from_json(payload: str | bytes) -> list[object]:
    """Split an orders payload into raw records without validating them."""
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise InvalidOrderError(f"orders file is not valid JSON: {exc}") from exc
    if isinstance(data, dict) and "orders" in data:
        data = data["orders"]
    if isinstance(data, dict):
        return [data]
    try:
        return list(require_list(data, 0, label="orders"))
    except ValueError as exc:
        raise InvalidOrderError(str(exc)) from exc


def orders_from_json(payload: str | bytes) -> list[Order]:
    return [order_from_dict(record) for record in order_records_from_json(payload)]


def load_order_records(path: str | Path) -> list[object]:
    return order_records_from_json(Path(path).read_bytes())


def load_orders(path: str | Path) -> list[Order]:
    return orders_from_json(Path(path).read_bytes())


def _parse_order(data: object) -> Order:
    record = require_dict(data, label="order")
    require_keys(record, _REQUIRED_KEYS, label="order")
    order_id = normalize_text(record["id"], label="id")
    if not order_id:
        raise ValueError("id must be a non-empty string")
    items = tuple(
        _parse_item(item, index=index)
        for index, item in enumerate(require_list(record["items"], 0, label="items"))
    )
    return Order(
        id=order_id,
        customer_name=normalize_text(record["customerName"], label="customerName"),
        customer_email=normalize_text(record["customerEmail"], label="customerEmail"),
        customer_phone=optional_text(record.get("customerPhone"), label="customerPhone"),
        shipping_address=_parse_address(record.get("shippingAddress")),
        items=items,
        total_amount=require_number(record["totalAmount"], label="totalAmount"),
        created_at=_parse_timestamp(record["createdAt"]),
        status=optional_text(record.get("status"), label="status") or "pending",
        payment_status=(
            optional_text(record.get("paymentStatus"), label="paymentStatus") or "pending"
        ),
        notes=optional_text(record.get("notes"), label="notes"),
    )


def _parse_address(value: object) -> ShippingAddress:
    if value is None:
        return ShippingAddress()
    cfg = require_dict(value, label="shippingAddress")
    fields: dict[str, str] = {}
    for key in ("street", "city", "state", "pincode"):
        raw = cfg.get(key)
        if isinstance(raw, int) and not isinstance(raw, bool):
            raw = str(raw)
        fields[key] = optional_text(raw, label=f"shippingAddress.{key}") or ""
    return ShippingAddress(**fields)


def _parse_item(value: object, *, index: int) -> OrderItem:
    label = f"items[{index}]"
    item = require_dict(value, label=label)
    require_keys(item, ("productName", "quantity"), label=label)
    price = item.get("price")
    return OrderItem(
        product_name=normalize_text(item["productName"], label=f"{label}.productName"),
        quantity=require_positive_int(item["quantity"], label=f"{label}.quantity"),
        product_id=optional_text(item.get("productId"), label=f"{label}.productId"),
        price=None if price is None else require_number(price, label=f"{label}.price"),
    )


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # Millisecond epoch, as exported by the order store.
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError) as exc:
            raise ValueError(f"createdAt epoch is out of range: {value!r}") from exc
    text = normalize_text(value, label="createdAt")
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"createdAt is not an ISO-8601 timestamp: {value!r}") from exc


__all__ = [
    "coerce_order",
    "load_order_records",
    "load_orders",
    "order_from_dict",
    "order_records_from_json",
    "orders_from_json",
    "record_id",
]
