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
from datetime import date

from ..core.errors import InvalidOrderError
from ..core.models import LabelLineItem, LabelRecord, Order, PartyAddress
from .formatting import format_amount, format_date

DEFAULT_ORG_TAG = "GS"
ORDER_NUMBER_SUFFIX_LEN = 8
SHORT_CODE_LEN = 6


def derive_order_number(order_id: str, tag: str = DEFAULT_ORG_TAG) -> str:
    return f"{tag}{order_id[-ORDER_NUMBER_SUFFIX_LEN:].upper()}"


def derive_short_code(product_id: str | None) -> str | None:
    if product_id is None or not product_id.strip():
        return None
    return product_id.strip()[-SHORT_CODE_LEN:].upper()


def map_order_to_label(
    order: Order,
    *,
    sender: PartyAddress,
    org_tag: str = DEFAULT_ORG_TAG,
    today: date | None = None,
) -> LabelRecord:
    if not order.items:
        raise InvalidOrderError(f"order {order.id} has no items", order_id=order.id)
    total = order.total_amount
    if isinstance(total, bool) or not isinstance(total, (int, float)) or not math.isfinite(total):
        raise InvalidOrderError(
            f"order {order.id} total amount is not a finite number", order_id=order.id
        )
    missing = order.shipping_address.missing_fields()
    if missing:
        raise InvalidOrderError(
            f"order {order.id} shipping address is missing {', '.join(missing)}",
            order_id=order.id,
        )

    address = order.shipping_address
    ship_to = PartyAddress(
        name=order.customer_name,
        lines=(
            address.street,
            f"{address.city}, {address.state}",
            f"PIN: {address.pincode}",
        ),
        phone=order.customer_phone,
        email=order.customer_email,
    )
    line_items = tuple(
        LabelLineItem(
            name=item.product_name,
            quantity=item.quantity,
            code=derive_short_code(item.product_id),
        )
        for item in order.items
    )
    label_day = today if today is not None else date.today()
    return LabelRecord(
        order_id=order.id,
        order_number=derive_order_number(order.id, org_tag),
        ship_to=ship_to,
        ship_from=sender,
        line_items=line_items,
        total_amount=order.total_amount,
        total_display=format_amount(order.total_amount),
        order_date=format_date(order.created_at),
        label_date=format_date(label_day),
    )


__all__ = [
    "DEFAULT_ORG_TAG",
    "derive_order_number",
    "derive_short_code",
    "map_order_to_label",
]
