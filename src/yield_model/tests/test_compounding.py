# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Tests for compound-interest projection.
"""

import math
import unittest

from ..compounding import (
    YieldScenario,
    apy_sensitivity,
    compare_yields,
    project,
    projection_schedule,
)


class TestProject(unittest.TestCase):
    """Tests for project()."""

    def test_zero_apy_returns_principal(self):
        """Zero APY leaves the principal unchanged for any duration."""
        for days in (0, 1, 30, 365, 1000):
            self.assertEqual(project(10000, 0, days), 10000)

    def test_zero_days_returns_principal(self):
        """Zero days leaves the principal unchanged for any APY."""
        for apy in (-50, -1.5, 0, 14.5, 300):
            self.assertEqual(project(10000, apy, 0), 10000)

    def test_daily_compounding_one_year(self):
        """Daily compounding over a year matches the closed form."""
        expected = 10000 * (1 + 0.145 / 365) ** 365
        self.assertAlmostEqual(project(10000, 14.5, 365), expected, places=6)

    def test_annual_compounding(self):
        """Frequency 1 over one year is simple growth at the APY."""
        self.assertAlmostEqual(project(1000, 10, 365, compounding_frequency=1), 1100.0)

    def test_monthly_compounding_two_years(self):
        """Monthly compounding counts periods of 365/12 days."""
        expected = 5000 * (1 + 0.12 / 12) ** 24
        self.assertAlmostEqual(project(5000, 12, 730, compounding_frequency=12), expected, places=6)

    def test_negative_apy_shrinks_value(self):
        """Negative APY decays the principal."""
        self.assertLess(project(1000, -10, 365), 1000)

    def test_zero_principal(self):
        self.assertEqual(project(0, 14.5, 365), 0)

    def test_degenerate_inputs_do_not_raise(self):
        """Non-positive frequency and negative days produce numbers, not errors."""
        results = [
            project(1000, 10, 365, compounding_frequency=0),
            project(1000, 0, 365, compounding_frequency=0),
            project(1000, 10, 365, compounding_frequency=-4),
            project(1000, -500, 100, compounding_frequency=-1),
            project(1000, 10, -365),
        ]
        for result in results:
            self.assertIsInstance(result, float)

    def test_negative_days_discounts(self):
        """Negative days run the compounding backwards."""
        self.assertLess(project(1000, 10, -365), 1000)


class TestYieldScenario(unittest.TestCase):
    """Tests for YieldScenario."""

    def test_defaults(self):
        scenario = YieldScenario(10000, 14.5, 365)
        self.assertEqual(scenario.compounding_frequency, 365)

    def test_project_matches_function(self):
        scenario = YieldScenario(10000, 14.5, 365, compounding_frequency=12)
        self.assertEqual(scenario.project(), project(10000, 14.5, 365, 12))
        self.assertAlmostEqual(scenario.profit(), scenario.project() - 10000)


class TestProjectionSchedule(unittest.TestCase):
    """Tests for projection_schedule()."""

    def test_monthly_rows_for_one_year(self):
        """A one-year horizon yields twelve 30-day checkpoints."""
        df = projection_schedule(10000, 14.5, 365)
        self.assertEqual(list(df.columns), ['Period', 'Days', 'Value', 'Profit'])
        self.assertEqual(len(df), 12)
        self.assertEqual(df['Days'].tolist(), [30 * m for m in range(1, 13)])
        self.assertAlmostEqual(df['Value'].iloc[0], project(10000, 14.5, 30))

    def test_short_horizon_truncates(self):
        """Only whole steps inside the horizon are reported."""
        df = projection_schedule(10000, 14.5, 95)
        self.assertEqual(df['Days'].tolist(), [30, 60, 90])

    def test_values_increase_with_positive_apy(self):
        df = projection_schedule(10000, 14.5, 365)
        self.assertTrue(df['Value'].is_monotonic_increasing)
        self.assertTrue((df['Profit'] > 0).all())

    def test_horizon_shorter_than_step_is_empty(self):
        df = projection_schedule(10000, 14.5, 10)
        self.assertTrue(df.empty)
        self.assertEqual(list(df.columns), ['Period', 'Days', 'Value', 'Profit'])


class TestSensitivity(unittest.TestCase):
    """Tests for apy_sensitivity() and compare_yields()."""

    def test_sensitivity_rows(self):
        df = apy_sensitivity(10000, [10, 12, 14.5, 17, 20], 365)
        self.assertEqual(len(df), 5)
        self.assertTrue(df['Final Value'].is_monotonic_increasing)
        expected_roi = (project(10000, 10, 365) / 10000 - 1) * 100
        self.assertAlmostEqual(df['ROI'].iloc[0], expected_roi)

    def test_sensitivity_zero_principal(self):
        df = apy_sensitivity(0, [10], 365)
        self.assertEqual(df['ROI'].iloc[0], 0.0)

    def test_compare_yields(self):
        df = compare_yields(10000, 365, {
            'High Yield Savings': 4.5,
            'S&P 500 (avg)': 10,
            'JLP (current)': 14.5,
        })
        self.assertEqual(df.index.tolist(), ['High Yield Savings', 'S&P 500 (avg)', 'JLP (current)'])
        self.assertAlmostEqual(df.loc['S&P 500 (avg)', 'Final Value'], project(10000, 10, 365))
        self.assertFalse(math.isnan(df.loc['JLP (current)', 'Final Value']))


if __name__ == '__main__':
    unittest.main()
