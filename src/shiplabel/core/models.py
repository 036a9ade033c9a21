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

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ShippingAddress:
    street: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""

    def missing_fields(self) -> tuple[str, ...]:
        return tuple(
            name
            for name in ("street", "city", "state", "pincode")
            if not str(getattr(self, name) or "").strip()
        )


@dataclass(frozen=True)
class OrderItem:
    product_name: str
    quantity: int
    product_id: str | None = None
    price: float | None = None


@dataclass(frozen=True)
class Order:
    id: str
    customer_name: str
    customer_email: str
    shipping_address: ShippingAddress
    items: tuple[OrderItem, ...]
    total_amount: float
    created_at: datetime
    status: str = "pending"
    payment_status: str = "pending"
    customer_phone: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class PartyAddress:
    name: str
    lines: tuple[str, ...]
    phone: str | None = None
    email: str | None = None
    website: str | None = None


@dataclass(frozen=True)
class LabelLineItem:
    name: str
    quantity: int
    code: str | None = None


@dataclass(frozen=True)
class LabelRecord:
    order_id: str
    order_number: str
    ship_to: PartyAddress
    ship_from: PartyAddress
    line_items: tuple[LabelLineItem, ...]
    total_amount: float
    total_display: str
    order_date: str
    label_date: str

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.line_items)
