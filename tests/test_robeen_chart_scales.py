from __future__ import annotations

import unittest

import numpy as np

from robeen_chart.config import Margin
from robeen_chart.measurements import Measurement
from robeen_chart.scales import (
    BandScale,
    LinearScale,
    PlotArea,
    build_scales,
    generate_nice_ticks,
    plot_area_for,
)


def _m(*pairs: tuple[str, float]) -> list[Measurement]:
    return [Measurement(label, value) for label, value in pairs]


class ScaleBuilderTests(unittest.TestCase):
    def test_domain_rounds_up_to_next_hundred(self) -> None:
        scales = build_scales(_m(("a", 73), ("b", 241)), PlotArea(width=600, height=100))
        self.assertEqual(scales.linear.domain_max, 300)
        self.assertAlmostEqual(scales.linear(241), 600 * 241 / 300)

    def test_exact_hundred_is_kept(self) -> None:
        scales = build_scales(_m(("a", 100)), PlotArea(width=50, height=10))
        self.assertEqual(scales.linear.domain_max, 100)

    def test_empty_dataset_is_degenerate(self) -> None:
        scales = build_scales([], PlotArea(width=600, height=100))
        self.assertEqual(scales.linear.domain_max, 0)
        self.assertEqual(scales.linear(50), 0.0)
        self.assertEqual(scales.linear.ticks().size, 0)
        self.assertEqual(scales.band.domain, ())
        self.assertEqual(scales.band.bandwidth, 0.0)

    def test_non_positive_values_keep_domain_at_zero(self) -> None:
        for values in ([0.0, 0.0], [-250.0, -10.0]):
            with self.subTest(values=values):
                scales = build_scales(_m(*[(f"m{i}", v) for i, v in enumerate(values)]), PlotArea(100, 100))
                self.assertEqual(scales.linear.domain_max, 0)

    def test_nan_is_ignored_for_domain(self) -> None:
        scales = build_scales(_m(("a", float("nan")), ("b", 150)), PlotArea(100, 100))
        self.assertEqual(scales.linear.domain_max, 200)

    def test_band_layout_for_three_categories(self) -> None:
        scales = build_scales(_m(("x.a", 1), ("x.b", 2), ("x.c", 3)), PlotArea(width=10, height=100), padding=0.2)
        band = scales.band
        self.assertEqual(band.domain, ("a", "b", "c"))
        self.assertAlmostEqual(band.step, 33.33, places=2)
        self.assertAlmostEqual(band.bandwidth, 26.67, places=2)
        self.assertAlmostEqual(band("a") or 0.0, 3.33, places=2)
        self.assertAlmostEqual(band("b") or 0.0, 36.67, places=2)

    def test_colliding_category_keys_share_a_band(self) -> None:
        scales = build_scales(_m(("a.run", 1), ("b.run", 2), ("c.other", 3)), PlotArea(10, 100))
        self.assertEqual(scales.band.domain, ("run", "other"))

    def test_sort_mode_orders_bands_by_ascending_value(self) -> None:
        data = _m(("p.a", 30), ("p.b", 10), ("p.c", 20))
        self.assertEqual(build_scales(data, PlotArea(10, 90)).band.domain, ("a", "b", "c"))
        self.assertEqual(build_scales(data, PlotArea(10, 90), sort_data=True).band.domain, ("b", "c", "a"))

    def test_unknown_band_key_maps_to_none(self) -> None:
        band = BandScale(domain=("a",), range_max=10)
        self.assertIsNone(band("zzz"))
        self.assertIsNone(band.center("zzz"))

    def test_plot_area_subtracts_margins(self) -> None:
        area = plot_area_for(800, 400, Margin(top=20, right=20, bottom=30, left=150))
        self.assertEqual(area, PlotArea(width=630, height=350))


class NiceTickTests(unittest.TestCase):
    def test_linear_ticks_stay_inside_domain(self) -> None:
        ticks = LinearScale(domain_max=300, range_max=600).ticks(10)
        np.testing.assert_allclose(ticks, [0, 50, 100, 150, 200, 250, 300])

    def test_hundred_domain_ticks_by_ten(self) -> None:
        ticks = LinearScale(domain_max=100, range_max=100).ticks(10)
        self.assertEqual(ticks.size, 11)
        self.assertEqual(float(ticks[-1]), 100.0)

    def test_generate_nice_ticks_rejects_zero_target(self) -> None:
        with self.assertRaises(ValueError):
            generate_nice_ticks(0.0, 1.0, 0)


if __name__ == "__main__":
    unittest.main()
