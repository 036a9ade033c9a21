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

import contextlib
import json
import re
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from test_support import TEST_TODAY, FakeRasterizer, make_order_dict
from typer.testing import CliRunner

from shiplabel.cli import app
from shiplabel.config.installer import DEFAULT_CONFIG_PATH
from shiplabel.render.service import LabelService

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")
_COMMAND_MODULES = ("single", "batch", "preview", "demo")


def _strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


class TestCliTyper(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()
        self.rasterizer = FakeRasterizer()
        self._tmp = tempfile.TemporaryDirectory()
        self.tmpdir = Path(self._tmp.name)
        self.addCleanup(self._tmp.cleanup)

    @contextlib.contextmanager
    def _patched(self):
        def _service(config):
            return LabelService(config, rasterizer=self.rasterizer, today=lambda: TEST_TODAY)

        with contextlib.ExitStack() as stack:
            stack.enter_context(mock.patch("shiplabel.cli.app.run_startup", return_value=False))
            for name in _COMMAND_MODULES:
                stack.enter_context(
                    mock.patch(f"shiplabel.cli.commands.{name}.LabelService", side_effect=_service)
                )
            yield

    def _invoke(self, *args: str):
        with self._patched():
            return self.runner.invoke(app, ["--config", str(DEFAULT_CONFIG_PATH), *args])

    def _orders_file(self, payload: object) -> Path:
        path = self.tmpdir / "orders.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    def test_root_info_commands(self) -> None:
        with mock.patch("shiplabel.cli.app.run_startup", return_value=False):
            result = self.runner.invoke(app, ["--help"])
        self.assertEqual(result.exit_code, 0)
        for command in _COMMAND_MODULES:
            self.assertIn(command, _strip_ansi(result.output))

        result = self.runner.invoke(app, ["--version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("shiplabel", _strip_ansi(result.output))

    def test_root_no_subcommand_references_help(self) -> None:
        with mock.patch("shiplabel.cli.app.run_startup", return_value=False):
            result = self.runner.invoke(app, [])
        self.assertEqual(result.exit_code, 2)
        self.assertIn("shiplabel --help", _strip_ansi(result.output))

    def test_single_writes_pdf(self) -> None:
        orders = self._orders_file(make_order_dict())
        result = self._invoke("single", str(orders), "-o", str(self.tmpdir / "out"))
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue((self.tmpdir / "out" / "shipping-label-GS12345678.pdf").is_file())

    def test_single_invalid_order_exits_2(self) -> None:
        orders = self._orders_file(make_order_dict(items=[]))
        result = self._invoke("single", str(orders), "-o", str(self.tmpdir))
        self.assertEqual(result.exit_code, 2)
        self.assertIn("no items", _strip_ansi(result.output))

    def test_single_from_stdin(self) -> None:
        with self._patched():
            result = self.runner.invoke(
                app,
                ["--config", str(DEFAULT_CONFIG_PATH), "single", "-", "-o", str(self.tmpdir)],
                input=json.dumps(make_order_dict()),
            )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue((self.tmpdir / "shipping-label-GS12345678.pdf").is_file())

    def test_batch_partial_failure_exits_1(self) -> None:
        orders = self._orders_file(
            [
                make_order_dict("order_1"),
                make_order_dict("order_2", items=[]),
                make_order_dict("order_3"),
            ]
        )
        result = self._invoke("--quiet", "batch", str(orders), "-o", str(self.tmpdir))
        self.assertEqual(result.exit_code, 1, result.output)
        self.assertIn("order_2", _strip_ansi(result.output))
        batch_files = list(self.tmpdir.glob("shipping-labels-batch-*.pdf"))
        self.assertEqual(
            [path.name for path in batch_files], ["shipping-labels-batch-2025-01-20.pdf"]
        )

    def test_batch_malformed_record_is_skipped(self) -> None:
        orders = self._orders_file(
            [
                make_order_dict("order_1"),
                make_order_dict("order_2", items=[{"productName": "Ring", "quantity": 0}]),
                make_order_dict("order_3", totalAmount=float("nan")),
                make_order_dict("order_4"),
                "not an order",
            ]
        )
        result = self._invoke("--quiet", "batch", str(orders), "-o", str(self.tmpdir))
        self.assertEqual(result.exit_code, 1, result.output)
        output = _strip_ansi(result.output)
        for failed in ("order_2", "order_3", "<record 4>"):
            with self.subTest(failed=failed):
                self.assertIn(failed, output)
        self.assertEqual(
            [surface.order_id for surface in self.rasterizer.calls], ["order_1", "order_4"]
        )

    def test_batch_status_filter(self) -> None:
        orders = self._orders_file(
            [make_order_dict("order_1", status="pending"), make_order_dict("order_2")]
        )
        result = self._invoke("--quiet", "batch", str(orders), "-o", str(self.tmpdir))
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual([surface.order_id for surface in self.rasterizer.calls], ["order_2"])

        self.rasterizer.calls.clear()
        result = self._invoke(
            "--quiet", "batch", str(orders), "-o", str(self.tmpdir), "--all-statuses"
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(len(self.rasterizer.calls), 2)

    def test_batch_all_failed_exits_2(self) -> None:
        orders = self._orders_file([make_order_dict("order_1", items=[])])
        result = self._invoke("batch", str(orders), "-o", str(self.tmpdir))
        self.assertEqual(result.exit_code, 2)
        self.assertIn("no labels could be rendered", _strip_ansi(result.output))

    def test_batch_empty_after_filter_exits_2(self) -> None:
        orders = self._orders_file([make_order_dict("order_1", status="cancelled")])
        result = self._invoke("batch", str(orders), "-o", str(self.tmpdir))
        self.assertEqual(result.exit_code, 2)

    def test_preview_writes_html(self) -> None:
        orders = self._orders_file(make_order_dict())
        target = self.tmpdir / "label.html"
        result = self._invoke("preview", str(orders), "-o", str(target))
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("GS12345678", target.read_text(encoding="utf-8"))
        self.assertEqual(self.rasterizer.calls, [])

    def test_demo_writes_pdf(self) -> None:
        result = self._invoke("demo", "-o", str(self.tmpdir))
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("GS12345678", _strip_ansi(result.output))
        self.assertTrue((self.tmpdir / "shipping-label-GS12345678.pdf").is_file())

    def test_missing_orders_file_exits_2(self) -> None:
        result = self._invoke("single", str(self.tmpdir / "missing.json"))
        self.assertEqual(result.exit_code, 2)
        self.assertIn("not found", _strip_ansi(result.output))


if __name__ == "__main__":
    unittest.main()
