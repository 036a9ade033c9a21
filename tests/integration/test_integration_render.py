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

import io
import unittest

from PIL import Image
from test_support import TEST_TODAY, make_test_order, page_size_mm, pdf_reader, playwright_ready

from shiplabel.cli.commands.demo import DEMO_ORDER
from shiplabel.config import default_app_config
from shiplabel.core.orders import order_from_dict
from shiplabel.render.rasterize import PlaywrightRasterizer
from shiplabel.render.service import LabelService

_PLAYWRIGHT_READY = playwright_ready()


class TestIntegrationRender(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        if not _PLAYWRIGHT_READY:
            raise unittest.SkipTest("playwright not available")
        cls.rasterizer = PlaywrightRasterizer()
        cls.service = LabelService(
            default_app_config(), rasterizer=cls.rasterizer, today=lambda: TEST_TODAY
        )

    @classmethod
    def tearDownClass(cls) -> None:
        cls.rasterizer.close()

    def test_raster_matches_label_geometry(self) -> None:
        raster = self.service.raster(order_from_dict(DEMO_ORDER))
        self.assertEqual((raster.width_px, raster.height_px), (756, 1134))
        with Image.open(io.BytesIO(raster.png)) as image:
            self.assertEqual(image.mode, "RGB")
            self.assertEqual(image.getpixel((20, image.height // 2)), (255, 255, 255))

    def test_single_and_batch_documents(self) -> None:
        single = self.service.single_document(order_from_dict(DEMO_ORDER))
        reader = pdf_reader(single.data)
        self.assertEqual(len(reader.pages), 1)
        width, height = page_size_mm(reader)
        self.assertAlmostEqual(width, 100.0, places=1)
        self.assertAlmostEqual(height, 150.0, places=1)

        orders = [
            make_test_order("order_00000001"),
            make_test_order("order_00000002", items=()),
            make_test_order("order_00000003"),
        ]
        result = self.service.batch_document(orders)
        self.assertEqual(len(pdf_reader(result.data).pages), 2)
        self.assertEqual([f.order_id for f in result.failures], ["order_00000002"])


if __name__ == "__main__":
    unittest.main()
