from __future__ import annotations

import unittest

from robeen_chart.formatting import format_tick, format_value


class FormatValueTests(unittest.TestCase):
    def test_auto_drops_trailing_fraction_zeros(self) -> None:
        self.assertEqual(format_value("auto", 250.0), "250")
        self.assertEqual(format_value(None, 2.5), "2.5")
        self.assertEqual(format_value("", 0.1 + 0.2), "0.3")

    def test_integer_rounds(self) -> None:
        self.assertEqual(format_value("integer", 249.6), "250")

    def test_thousands_grouping(self) -> None:
        self.assertEqual(format_value("thousands", 1234567), "1,234,567")
        self.assertEqual(format_value("thousands", 1234.5), "1,234.5")

    def test_si_suffixes(self) -> None:
        self.assertEqual(format_value("si", 1500), "1.5k")
        self.assertEqual(format_value("si", 2_000_000), "2M")
        self.assertEqual(format_value("si", 12), "12")

    def test_percent_and_fixed(self) -> None:
        self.assertEqual(format_value("percent", 0.25), "25%")
        self.assertEqual(format_value("fixed:2", 3.14159), "3.14")

    def test_unknown_spec_falls_back_to_str(self) -> None:
        self.assertEqual(format_value("ops-per-fortnight", 12.5), "12.5")
        self.assertEqual(format_value("xyz", 7), "7")
        self.assertEqual(format_value("fixed:x", 1.5), "1.5")
        self.assertEqual(format_value(5, 10.0), "10.0")
        self.assertEqual(format_value(["auto"], 3), "3")

    def test_never_raises_on_odd_values(self) -> None:
        self.assertEqual(format_value("auto", "abc"), "abc")
        self.assertEqual(format_value("si", float("nan")), "nan")
        self.assertEqual(format_value("integer", None), "None")

    def test_auto_uses_axis_step_for_notation(self) -> None:
        self.assertEqual(format_value("auto", 1_000_000.0), "1.0000e+06")
        self.assertEqual(format_value("auto", 1_000_000.0, step=500_000.0), "1000000")
        self.assertEqual(format_value("auto", 500_000.0, step=500_000.0), "500000")
        self.assertEqual(format_value("auto", 3_000_000.0, step=1_000_000.0), "3.0000e+06")

    def test_format_tick_snaps_near_zero(self) -> None:
        self.assertEqual(format_tick(-4.4409e-16, step=1.0), "0")
        self.assertEqual(format_tick(30.0), "30")


if __name__ == "__main__":
    unittest.main()
