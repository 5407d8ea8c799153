# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""
Tests for the price-path simulator and Monte Carlo aggregation.
"""

import math
import unittest
from unittest.mock import patch

import numpy as np

from ..compounding import project
from ..exceptions import UnknownScenarioError
from ..montecarlo.config import MonteCarloConfig
from ..montecarlo.price_path import PricePathGenerator, UniformSampler, simulate_path
from ..montecarlo.results import PERCENTILE_RANKS, SimulationSummary, SimulationTrial
from ..montecarlo.scenarios import PRICE_SCENARIOS, PriceScenario
from ..montecarlo.simulator import MonteCarloSimulator, run_trials


class ScriptedSampler:
    """Uniform sampler that replays fractions of the requested interval.

    A fraction of 0 maps to ``low``, 1 to ``high``, 0.5 to the midpoint.
    Fractions are consumed in order and cycle when exhausted.
    """

    def __init__(self, fractions):
        self.fractions = list(fractions)
        self._pos = 0
        self.calls = []

    def uniform(self, low, high, size):
        self.calls.append((low, high, size))
        draws = []
        for _ in range(size):
            frac = self.fractions[self._pos % len(self.fractions)]
            self._pos += 1
            draws.append(low + frac * (high - low))
        return draws


class TestMonteCarloConfig(unittest.TestCase):
    """Tests for MonteCarloConfig."""

    def test_default_values(self):
        config = MonteCarloConfig()
        self.assertEqual(config.num_simulations, 1000)
        self.assertIsNone(config.random_seed)

    def test_custom_values(self):
        config = MonteCarloConfig(num_simulations=5000, random_seed=42)
        self.assertEqual(config.num_simulations, 5000)
        self.assertEqual(config.random_seed, 42)

    def test_invalid_num_simulations(self):
        with self.assertRaises(ValueError):
            MonteCarloConfig(num_simulations=0)
        with self.assertRaises(ValueError):
            MonteCarloConfig(num_simulations=-1)


class TestPriceScenario(unittest.TestCase):
    """Tests for the built-in price scenarios."""

    def test_stable_profile(self):
        stable = PriceScenario.get("stable")
        self.assertEqual(stable.drift, 0.0)
        self.assertEqual(stable.volatility, 0.02)

    def test_all_profiles_present(self):
        self.assertEqual(set(PriceScenario.names()), {"stable", "bullish", "bearish", "volatile"})
        self.assertEqual(PRICE_SCENARIOS["bearish"].drift, -0.15)

    def test_unknown_scenario_raises(self):
        with self.assertRaises(UnknownScenarioError):
            PriceScenario.get("moon")
        # Also usable as a KeyError by callers
        with self.assertRaises(KeyError):
            PriceScenario.get("moon")


class TestSimulatePath(unittest.TestCase):
    """Tests for simulate_path()."""

    def test_zero_days_returns_start(self):
        self.assertEqual(simulate_path(1.0, 0, 0.0, 0.02), [1.0])
        self.assertEqual(simulate_path(42.5, 0, 0.15, 0.10), [42.5])

    def test_length_is_days_plus_one(self):
        rng = np.random.default_rng(1)
        for days in (1, 2, 30, 365):
            path = simulate_path(1.0, days, 0.0, 0.02, rng)
            self.assertEqual(len(path), days + 1)
            self.assertEqual(path[0], 1.0)

    def test_negative_days_returns_start(self):
        """Negative durations are not validated; they produce a one-price path."""
        self.assertEqual(simulate_path(1.0, -5, 0.0, 0.02), [1.0])

    def test_midpoint_shocks_follow_drift(self):
        """Zero shocks leave pure daily drift compounding."""
        sampler = ScriptedSampler([0.5])
        path = simulate_path(100.0, 3, 0.365, 0.02, sampler)
        daily = 1 + 0.365 / 365
        self.assertAlmostEqual(path[1], 100.0 * daily)
        self.assertAlmostEqual(path[3], 100.0 * daily ** 3)

    def test_shock_bounds(self):
        """Shocks are drawn from [-vol/sqrt(365), vol/sqrt(365)]."""
        sampler = ScriptedSampler([1.0, 0.0])
        path = simulate_path(1.0, 2, 0.0, 0.02, sampler)
        daily_vol = 0.02 / math.sqrt(365)
        low, high, size = sampler.calls[0]
        self.assertAlmostEqual(low, -daily_vol)
        self.assertAlmostEqual(high, daily_vol)
        self.assertEqual(size, 2)
        self.assertAlmostEqual(path[1], 1 + daily_vol)
        self.assertAlmostEqual(path[2], (1 + daily_vol) * (1 - daily_vol))

    def test_negative_volatility_uses_same_interval(self):
        sampler = ScriptedSampler([0.0])
        simulate_path(1.0, 1, 0.0, -0.02, sampler)
        low, high, _ = sampler.calls[0]
        self.assertLess(low, 0)
        self.assertAlmostEqual(low, -high)

    def test_non_positive_start_price_does_not_raise(self):
        rng = np.random.default_rng(3)
        self.assertEqual(len(simulate_path(0.0, 10, 0.0, 0.02, rng)), 11)
        path = simulate_path(-1.0, 10, 0.0, 0.02, rng)
        self.assertTrue(all(p < 0 for p in path))

    def test_seeded_generator_is_reproducible(self):
        first = simulate_path(1.0, 50, 0.0, 0.15, np.random.default_rng(7))
        second = simulate_path(1.0, 50, 0.0, 0.15, np.random.default_rng(7))
        self.assertEqual(first, second)

    def test_numpy_generator_satisfies_protocol(self):
        self.assertIsInstance(np.random.default_rng(), UniformSampler)

    def test_unseeded_paths_differ(self):
        """Each call draws fresh shocks."""
        first = simulate_path(1.0, 30, 0.0, 0.15)
        second = simulate_path(1.0, 30, 0.0, 0.15)
        self.assertNotEqual(first, second)


class TestPricePathGenerator(unittest.TestCase):
    """Tests for PricePathGenerator."""

    def test_from_scenario_name(self):
        gen = PricePathGenerator.from_scenario("bullish", np.random.default_rng(0))
        self.assertEqual(gen.drift, 0.15)
        self.assertEqual(gen.volatility, 0.10)
        self.assertEqual(len(gen.generate(1.0, 10)), 11)

    def test_terminal_price(self):
        gen = PricePathGenerator(0.0, 0.02, ScriptedSampler([0.5]))
        self.assertAlmostEqual(gen.generate_terminal_price(1.0, 365), 1.0)


class TestSimulationSummary(unittest.TestCase):
    """Tests for percentile selection."""

    @staticmethod
    def _trials(values):
        return [SimulationTrial(0.0, v - 100.0, v, v - 100.0) for v in values]

    def test_nearest_rank_indices(self):
        """Index floor(n * rank) of the sorted totals is selected."""
        values = list(range(100, 0, -1))  # unsorted on purpose
        summary = SimulationSummary.from_trials(self._trials(values), principal=100.0)
        # sorted ascending: 1..100, index k holds k + 1
        self.assertEqual(summary.worst.total_value, 6)
        self.assertEqual(summary.p25.total_value, 26)
        self.assertEqual(summary.median.total_value, 51)
        self.assertEqual(summary.p75.total_value, 76)
        self.assertEqual(summary.best.total_value, 96)
        self.assertEqual(summary.num_trials, 100)

    def test_single_trial(self):
        summary = SimulationSummary.from_trials(self._trials([5.0]), principal=1.0)
        self.assertEqual(summary.total_values(), [5.0] * 5)

    def test_empty_trials_raises(self):
        with self.assertRaises(ValueError):
            SimulationSummary.from_trials([], principal=1.0)

    def test_risk_metrics(self):
        values = [90.0] * 10 + [120.0] * 90
        summary = SimulationSummary.from_trials(self._trials(values), principal=100.0)
        risk = summary.risk_metrics()
        self.assertAlmostEqual(risk.downside_risk, 10.0)
        self.assertAlmostEqual(risk.upside_potential, 20.0)
        self.assertAlmostEqual(risk.reward_to_risk, 2.0)

    def test_risk_metrics_without_downside(self):
        summary = SimulationSummary.from_trials(self._trials([100.0] * 20), principal=100.0)
        self.assertEqual(summary.risk_metrics().reward_to_risk, 0.0)

    def test_to_dataframe(self):
        summary = SimulationSummary.from_trials(self._trials(range(1, 21)), principal=10.0)
        df = summary.to_dataframe()
        self.assertEqual(df.index.tolist(), list(PERCENTILE_RANKS))
        self.assertIn('total_value', df.columns)
        self.assertTrue(df['total_value'].is_monotonic_increasing)
        self.assertEqual(set(summary.as_dict()), set(PERCENTILE_RANKS))


class TestMonteCarloSimulator(unittest.TestCase):
    """Tests for MonteCarloSimulator and run_trials()."""

    def test_percentiles_are_ordered(self):
        for trial_count in (5, 17, 1000):
            summary = run_trials(10000, 14.5, 365, trial_count,
                                 sampler=np.random.default_rng(trial_count))
            values = summary.total_values()
            self.assertEqual(values, sorted(values))

    def test_trial_components(self):
        """Components add up and ROI is relative to principal."""
        summary = run_trials(10000, 14.5, 365, 200, sampler=np.random.default_rng(11))
        expected_yield = project(10000, 14.5, 365) - 10000
        for trial in summary.percentiles().values():
            self.assertAlmostEqual(trial.yield_component, expected_yield)
            self.assertAlmostEqual(trial.price_return_component,
                                   10000 * (trial.terminal_price - 1))
            self.assertAlmostEqual(trial.total_value,
                                   10000 + trial.yield_component + trial.price_return_component)
            self.assertAlmostEqual(trial.roi, (trial.total_value - 10000) / 10000 * 100)

    def test_zero_shocks_reproduce_pure_yield(self):
        """With midpoint shocks and zero drift the price never moves."""
        summary = run_trials(10000, 14.5, 365, 10, sampler=ScriptedSampler([0.5]))
        expected = project(10000, 14.5, 365)
        for value in summary.total_values():
            self.assertAlmostEqual(value, expected)

    def test_stable_profile_used(self):
        sampler = ScriptedSampler([0.5])
        run_trials(1000, 10, 30, 3, sampler=sampler)
        low, high, size = sampler.calls[0]
        self.assertAlmostEqual(high, 0.02 / math.sqrt(365))
        self.assertEqual(size, 30)
        self.assertEqual(len(sampler.calls), 3)

    def test_median_near_pure_yield(self):
        """Stable profile has no drift, so the median sits close to the yield-only value."""
        summary = run_trials(10000, 14.5, 365, 2000, sampler=np.random.default_rng(5))
        expected = project(10000, 14.5, 365)
        self.assertLess(abs(summary.median.total_value - expected) / expected, 0.01)

    def test_seeded_config_is_reproducible(self):
        config = MonteCarloConfig(num_simulations=50, random_seed=123)
        first = MonteCarloSimulator(config=config).run(1000, 10, 90)
        second = MonteCarloSimulator(config=config).run(1000, 10, 90)
        self.assertEqual(first, second)

    def test_named_scenario(self):
        simulator = MonteCarloSimulator(
            config=MonteCarloConfig(num_simulations=20, random_seed=1),
            scenario="bearish",
        )
        self.assertEqual(simulator.scenario.drift, -0.15)
        summary = simulator.run(1000, 0, 365)
        self.assertLess(summary.median.total_value, 1000)

    def test_run_single(self):
        simulator = MonteCarloSimulator(sampler=ScriptedSampler([0.5]))
        trial = simulator.run_single(1000, 10, 365)
        self.assertAlmostEqual(trial.total_value, project(1000, 10, 365))

    def test_degenerate_inputs_do_not_raise(self):
        """Zero principal, zero or negative days are computed, not rejected."""
        rng = np.random.default_rng(9)
        zero_principal = run_trials(0, 14.5, 365, 10, sampler=rng)
        self.assertEqual(zero_principal.median.total_value, 0)
        self.assertEqual(zero_principal.median.roi, 0.0)
        self.assertEqual(zero_principal.risk_metrics().downside_risk, 0.0)

        zero_days = run_trials(1000, 14.5, 0, 10, sampler=rng)
        self.assertEqual(zero_days.median.total_value, 1000)

        negative_days = run_trials(1000, 14.5, -30, 10, sampler=rng)
        self.assertLess(negative_days.median.total_value, 1000)

    def test_zero_principal_reports_zero_roi(self):
        summary = run_trials(0, 14.5, 365, 5, sampler=np.random.default_rng(3))
        for trial in summary.percentiles().values():
            self.assertEqual(trial.roi, 0.0)
        self.assertEqual(summary.risk_metrics().reward_to_risk, 0.0)

    def test_low_trial_count_warns(self):
        with self.assertLogs('yield_model.montecarlo.simulator', level='WARNING'):
            run_trials(1000, 10, 30, 5, sampler=np.random.default_rng(0))

    def test_default_sampler_created_per_simulator(self):
        with patch('yield_model.montecarlo.simulator.default_sampler',
                   return_value=ScriptedSampler([0.5])) as factory:
            MonteCarloSimulator(config=MonteCarloConfig(num_simulations=2, random_seed=8))
            factory.assert_called_once_with(8)


if __name__ == '__main__':
    unittest.main()
