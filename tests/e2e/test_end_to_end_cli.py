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

import json
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path

from test_support import build_cli_env, make_order_dict, playwright_ready

from shiplabel.config.installer import DEFAULT_CONFIG_PATH

_PLAYWRIGHT_READY = playwright_ready()


def _run_cli(args: list[str], tmp_path: Path, *, skip_playwright: bool = True):
    env = build_cli_env(
        overrides={"XDG_CONFIG_HOME": str(tmp_path / "xdg")},
        skip_playwright=skip_playwright,
    )
    return subprocess.run(
        [sys.executable, "-m", "shiplabel", "--config", str(DEFAULT_CONFIG_PATH), *args],
        cwd=tmp_path,
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )


class TestEndToEndCli(unittest.TestCase):
    def test_preview_cli_writes_html(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp_path = Path(tmpdir)
            order_path = tmp_path / "order.json"
            order_path.write_text(json.dumps(make_order_dict()), encoding="utf-8")

            result = _run_cli(["--quiet", "preview", str(order_path)], tmp_path)

            self.assertEqual(result.returncode, 0, result.stderr)
            html = (tmp_path / "shipping-label-GS12345678.html").read_text(encoding="utf-8")
            self.assertIn("Silver Anklet", html)
            self.assertIn("Value: ₹2,499", html)

    def test_init_config_creates_user_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp_path = Path(tmpdir)
            result = _run_cli(["--init-config"], tmp_path)
            self.assertEqual(result.returncode, 0, result.stderr)
            user_dir = tmp_path / "xdg" / "shiplabel"
            self.assertTrue((user_dir / "config.toml").is_file())
            self.assertTrue(
                (user_dir / "templates" / "label" / "shipping_label.html.j2").is_file()
            )

    def test_batch_cli_creates_pdf(self) -> None:
        if not _PLAYWRIGHT_READY:
            self.skipTest("playwright not available")
        with tempfile.TemporaryDirectory() as tmpdir:
            tmp_path = Path(tmpdir)
            orders_path = tmp_path / "orders.json"
            orders = [
                make_order_dict("order_00000001"),
                make_order_dict("order_00000002", items=[]),
                make_order_dict("order_00000003"),
            ]
            orders_path.write_text(json.dumps({"orders": orders}), encoding="utf-8")

            result = _run_cli(
                ["--quiet", "batch", str(orders_path), "-o", str(tmp_path / "out")], tmp_path
            )

            self.assertEqual(result.returncode, 1, result.stderr)
            self.assertIn("order_00000002", result.stdout + result.stderr)
            self.assertEqual(len(list((tmp_path / "out").glob("shipping-labels-batch-*.pdf"))), 1)


if __name__ == "__main__":
    unittest.main()
