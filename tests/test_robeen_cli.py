from __future__ import annotations

import contextlib
import io
import json
from pathlib import Path
import tempfile
import unittest
from unittest import mock

import main as cli


RESULTS = [
    {"benchmark": "org.sample.Bench.fast", "primaryMetric": {"score": 241.0}},
    {"benchmark": "org.sample.Bench.slow", "primaryMetric": {"score": 73.0}},
]


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.results = self.tmp / "results.json"
        self.results.write_text(json.dumps(RESULTS), encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_render_svg_and_png(self) -> None:
        for name in ("chart.svg", "chart.png"):
            with self.subTest(output=name):
                out = self.tmp / name
                self.assertEqual(cli.main(["render", str(self.results), "--output", str(out)]), 0)
                self.assertTrue(out.exists())
        self.assertIn('class="bar"', (self.tmp / "chart.svg").read_text(encoding="utf-8"))

    def test_invalid_config_renders_error_state(self) -> None:
        config = self.tmp / "chart.toml"
        config.write_text("colors = []\n", encoding="utf-8")
        out = self.tmp / "chart.svg"
        with self.assertLogs("robeen", level="WARNING"):
            status = cli.main(["render", str(self.results), "--output", str(out), "--config", str(config)])
        self.assertEqual(status, 1)
        self.assertIn("palette must not be empty", out.read_text(encoding="utf-8"))

    def test_unsupported_output_format(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            status = cli.main(["render", str(self.results), "--output", str(self.tmp / "chart.gif")])
        self.assertEqual(status, 2)

    def test_inspect_prints_geometry(self) -> None:
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            status = cli.main(["inspect", str(self.results), "--width", "470", "--height", "150"])
        self.assertEqual(status, 0)
        payload = json.loads(buf.getvalue())
        self.assertEqual(payload["domain_max"], 300)
        self.assertEqual(payload["categories"], ["fast", "slow"])
        self.assertEqual(payload["plot_area"], {"width": 300.0, "height": 100.0})
        self.assertEqual([b["data_index"] for b in payload["geometry"]["bars"]], [0, 1])
        self.assertFalse(payload["no_data"])

    def test_inspect_without_drawable_surface_reports_error(self) -> None:
        err = io.StringIO()
        with mock.patch.object(cli.BarChart, "draw_chart", return_value=None), contextlib.redirect_stderr(err):
            status = cli.main(["inspect", str(self.results)])
        self.assertEqual(status, 1)
        self.assertIn("no size", err.getvalue())


if __name__ == "__main__":
    unittest.main()
