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

import unittest
from datetime import date

from test_support import TEST_TODAY, make_test_order

from shiplabel.config import default_app_config
from shiplabel.core.errors import InvalidOrderError
from shiplabel.core.models import OrderItem, ShippingAddress
from shiplabel.labels.mapper import (
    derive_order_number,
    derive_short_code,
    map_order_to_label,
)


class TestDerivedIdentifiers(unittest.TestCase):
    def test_order_number_uses_last_eight_chars_uppercased(self) -> None:
        self.assertEqual(derive_order_number("demo_order_12345678"), "GS12345678")
        self.assertEqual(derive_order_number("ord_abcdefgh"), "GSABCDEFGH")

    def test_order_number_short_id_and_custom_tag(self) -> None:
        self.assertEqual(derive_order_number("x1", "AB"), "ABX1")

    def test_short_code(self) -> None:
        self.assertEqual(derive_short_code("ruby_pendant_001"), "NT_001")
        self.assertEqual(derive_short_code("ab"), "AB")
        self.assertIsNone(derive_short_code(None))
        self.assertIsNone(derive_short_code("   "))


class TestMapOrderToLabel(unittest.TestCase):
    def setUp(self) -> None:
        self.sender = default_app_config().sender

    def test_maps_fields(self) -> None:
        order = make_test_order("order_abcdef12345678")
        record = map_order_to_label(order, sender=self.sender, today=TEST_TODAY)

        self.assertEqual(record.order_id, order.id)
        self.assertEqual(record.order_number, "GS12345678")
        self.assertEqual(record.ship_to.name, "Asha Rao")
        self.assertEqual(
            record.ship_to.lines,
            ("14 Lake View Road", "Pune, Maharashtra", "PIN: 411001"),
        )
        self.assertEqual(record.ship_to.phone, "+91 90000 00001")
        self.assertEqual(record.ship_from, self.sender)
        self.assertEqual(record.total_display, "2,499")
        self.assertEqual(record.order_date, "15/1/2025")
        self.assertEqual(record.label_date, "20/1/2025")
        self.assertEqual(record.item_count, 2)
        self.assertEqual(record.line_items[0].code, "000321")

    def test_mapping_is_deterministic(self) -> None:
        order = make_test_order()
        first = map_order_to_label(order, sender=self.sender, today=date(2025, 2, 1))
        second = map_order_to_label(order, sender=self.sender, today=date(2025, 2, 1))
        self.assertEqual(first, second)

    def test_item_without_product_id_has_no_code(self) -> None:
        order = make_test_order(items=(OrderItem("Gift Box", 1),))
        record = map_order_to_label(order, sender=self.sender, today=TEST_TODAY)
        self.assertIsNone(record.line_items[0].code)

    def test_rejects_order_without_items(self) -> None:
        order = make_test_order("empty_order", items=())
        with self.assertRaises(InvalidOrderError) as ctx:
            map_order_to_label(order, sender=self.sender, today=TEST_TODAY)
        self.assertEqual(ctx.exception.order_id, "empty_order")
        self.assertIn("no items", str(ctx.exception))

    def test_rejects_incomplete_address(self) -> None:
        order = make_test_order(
            address=ShippingAddress(street="1 Main Road", city="Pune", state="", pincode="")
        )
        with self.assertRaises(InvalidOrderError) as ctx:
            map_order_to_label(order, sender=self.sender, today=TEST_TODAY)
        self.assertIn("state", str(ctx.exception))
        self.assertIn("pincode", str(ctx.exception))

    def test_rejects_non_finite_total(self) -> None:
        for total in (float("nan"), float("inf"), float("-inf"), True, "2499"):
            with self.subTest(total=total):
                order = make_test_order("order_bad_total", total_amount=total)
                with self.assertRaises(InvalidOrderError) as ctx:
                    map_order_to_label(order, sender=self.sender, today=TEST_TODAY)
                self.assertEqual(ctx.exception.order_id, "order_bad_total")
                self.assertIn("finite", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
