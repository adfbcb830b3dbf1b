from __future__ import annotations

from pathlib import Path
import tempfile
import unittest
import xml.etree.ElementTree as ET

import numpy as np
from PIL import Image

from robeen_chart.chart import BarChart
from robeen_chart.config import ChartConfig
from robeen_chart.errors import SurfaceUnavailable
from robeen_ui.surfaces import RasterSurface, SVGSurface

NS = {"svg": "http://www.w3.org/2000/svg"}
DATA = [("org.A.alpha", 73.0), ("org.A.beta", 241.0), ("org.A.idle", 0.0)]


class SVGSurfaceTests(unittest.TestCase):
    def test_detached_surface_raises(self) -> None:
        with self.assertRaises(SurfaceUnavailable):
            SVGSurface().bounding_box()

    def test_mount_emits_bars_axes_and_grid(self) -> None:
        surface = SVGSurface(600, 300)
        state = BarChart(DATA, surface).draw_chart()
        assert state is not None and surface.markup is not None
        root = ET.fromstring(surface.markup)

        rects = root.findall(".//svg:rect[@class='bar']", NS)
        self.assertEqual([r.get("data-index") for r in rects], ["0", "1"])
        self.assertEqual(rects[0].get("fill"), state.geometry.bars[0].color)

        x_labels = [t.text for t in root.findall(".//svg:g[@class='x axis']//svg:text", NS)]
        self.assertEqual(x_labels, [t.text for t in state.geometry.x_ticks])
        y_labels = [t.text for t in root.findall(".//svg:g[@class='y axis']//svg:text", NS)]
        self.assertEqual(y_labels, ["alpha", "beta", "idle"])

        grids = root.findall(".//svg:g[@class='grid']", NS)
        self.assertEqual(len(grids), 1)
        self.assertEqual(grids[0].get("style"), "opacity: 0.1")

    def test_no_data_placeholder(self) -> None:
        surface = SVGSurface(400, 200)
        BarChart([], surface).draw_chart()
        assert surface.markup is not None
        root = ET.fromstring(surface.markup)
        self.assertEqual(root.findall(".//svg:rect", NS), [])
        self.assertEqual(root.find(".//svg:text[@class='placeholder']", NS).text, "No data")

    def test_show_error_and_save(self) -> None:
        surface = SVGSurface(400, 200)
        with self.assertLogs("robeen_ui.surfaces.svg", level="WARNING"):
            surface.show_error("palette must not be empty")
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "chart.svg"
            surface.save(path)
            self.assertIn("palette must not be empty", path.read_text(encoding="utf-8"))


class RasterSurfaceTests(unittest.TestCase):
    def test_bar_pixels_use_palette_colour(self) -> None:
        surface = RasterSurface(600, 300)
        BarChart([("a", 50.0)], surface, ChartConfig(colors=("#4E79A7",))).draw_chart()
        canvas = surface.canvas
        assert canvas is not None
        self.assertEqual(canvas.shape, (300, 600, 4))
        # plot origin (150, 20), bar spans x 150..365 and y 45..245
        self.assertEqual(tuple(int(v) for v in canvas[150, 200]), (78, 121, 167, 255))
        self.assertEqual(tuple(int(v) for v in canvas[5, 5]), (255, 255, 255, 255))

    def test_no_data_draws_placeholder_text(self) -> None:
        surface = RasterSurface(300, 200)
        BarChart([], surface).draw_chart()
        canvas = surface.canvas
        assert canvas is not None
        self.assertTrue(np.any(canvas[:, :, :3] != 255))

    def test_detached_surface_raises(self) -> None:
        surface = RasterSurface()
        with self.assertRaises(SurfaceUnavailable):
            surface.bounding_box()
        with self.assertRaises(RuntimeError):
            surface.to_image()

    def test_save_png_round_trip_size(self) -> None:
        surface = RasterSurface(320, 160)
        BarChart(DATA, surface).draw_chart()
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "chart.png"
            surface.save_png(path)
            with Image.open(path) as image:
                self.assertEqual(image.size, (320, 160))
                self.assertEqual(image.mode, "RGBA")


if __name__ == "__main__":
    unittest.main()
