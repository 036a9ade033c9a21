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

import logging
import runpy
import unittest
from types import SimpleNamespace
from unittest import mock

import typer
from test_support import make_order_dict, make_test_order

from shiplabel.cli.core import common, log
from shiplabel.cli.io.inputs import _filter_by_status
from shiplabel.core.errors import InvalidOrderError


class TestCliCoreCommon(unittest.TestCase):
    def test_run_cli_success_and_exit_codes(self) -> None:
        common._run_cli(lambda: None, debug=False)
        common._run_cli(lambda: 0, debug=False)
        with self.assertRaises(typer.Exit) as ctx:
            common._run_cli(lambda: 1, debug=False)
        self.assertEqual(ctx.exception.exit_code, 1)

    def test_run_cli_maps_errors_to_exit_2(self) -> None:
        def _boom() -> None:
            raise InvalidOrderError("order x has no items", order_id="x")

        with mock.patch.object(common.console_err, "print") as print_mock:
            with self.assertRaises(typer.Exit) as ctx:
                common._run_cli(_boom, debug=False)
        self.assertEqual(ctx.exception.exit_code, 2)
        self.assertIn("order x has no items", print_mock.call_args[0][0])

    def test_run_cli_debug_reraises(self) -> None:
        def _boom() -> None:
            raise ValueError("bad")

        with mock.patch.object(common, "install_rich_traceback"):
            with self.assertRaises(ValueError):
                common._run_cli(_boom, debug=True)

    def test_ctx_value(self) -> None:
        self.assertIsNone(common._ctx_value(SimpleNamespace(obj=None), "quiet"))
        self.assertTrue(common._ctx_value(SimpleNamespace(obj={"quiet": True}), "quiet"))

    def test_get_version_fallback(self) -> None:
        with mock.patch.object(
            common.importlib.metadata,
            "version",
            side_effect=common.importlib.metadata.PackageNotFoundError,
        ):
            self.assertEqual(common._get_version(), "0.0.0")


class TestCliLogging(unittest.TestCase):
    def tearDown(self) -> None:
        logger = logging.getLogger("shiplabel")
        for handler in list(logger.handlers):
            if handler.get_name() == log._HANDLER_NAME:
                logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        logger.propagate = True

    def test_configure_logging_levels_and_single_handler(self) -> None:
        logger = logging.getLogger("shiplabel")
        log.configure_logging(debug=False, quiet=False)
        self.assertEqual(logger.level, logging.WARNING)
        log.configure_logging(debug=True, quiet=False)
        self.assertEqual(logger.level, logging.DEBUG)
        log.configure_logging(debug=False, quiet=True)
        self.assertEqual(logger.level, logging.ERROR)
        named = [h for h in logger.handlers if h.get_name() == log._HANDLER_NAME]
        self.assertEqual(len(named), 1)
        self.assertFalse(logger.propagate)

    def test_warn_respects_quiet(self) -> None:
        with mock.patch.object(log.console_err, "print") as print_mock:
            log._warn("careful", quiet=True)
            print_mock.assert_not_called()
            log._warn("careful", quiet=False)
        print_mock.assert_called_once()


class TestStatusFilter(unittest.TestCase):
    def test_filters_raw_records_and_orders(self) -> None:
        records = [
            make_order_dict("order_1", status="Shipped"),
            make_order_dict("order_2", status="cancelled"),
            {k: v for k, v in make_order_dict("order_3").items() if k != "status"},
            make_test_order("order_4", status="processing"),
            "not an order",
        ]
        kept = _filter_by_status(records, ["processing", "shipped"])
        self.assertEqual(kept, [records[0], records[3], records[4]])
        self.assertEqual(_filter_by_status(records, ["pending"]), [records[2], records[4]])
        self.assertEqual(_filter_by_status(records, []), records)


class TestMainEntrypoints(unittest.TestCase):
    def test_module_entrypoints_call_main(self) -> None:
        for module in ("shiplabel", "shiplabel.cli"):
            with self.subTest(module=module):
                with mock.patch("shiplabel.cli.app.main") as main_mock:
                    with mock.patch("shiplabel.cli.main", main_mock):
                        runpy.run_module(module, run_name="__main__")
                main_mock.assert_called_once()


if __name__ == "__main__":
    unittest.main()
