import unittest

from _helpers import hourly_history, zigzag
from lprewards.constants import VolatilityLevel
from lprewards.scoring.volatility import (
    analyze_volatility,
    recommended_min_spread_ratio,
    volatility_level,
    volatility_score,
)
from lprewards.types import VolatilityParams


class TestAnalyzeVolatility(unittest.TestCase):
    def test_empty_history_is_all_zero(self):
        metrics = analyze_volatility([])
        self.assertEqual(metrics.volatility_score, 0.0)
        self.assertEqual(metrics.hourly_std_dev, 0.0)
        self.assertEqual(metrics.price_history, ())

    def test_single_point_is_all_zero(self):
        metrics = analyze_volatility(hourly_history([0.5]))
        self.assertEqual(metrics.volatility_score, 0.0)
        self.assertEqual(metrics.max_hourly_swing, 0.0)

    def test_flat_history_scores_zero(self):
        metrics = analyze_volatility(hourly_history([0.5] * 48))
        self.assertEqual(metrics.hourly_std_dev, 0.0)
        self.assertEqual(metrics.daily_std_dev, 0.0)
        self.assertEqual(metrics.volatility_score, 0.0)

    def test_short_history_has_no_daily_component(self):
        metrics = analyze_volatility(hourly_history([0.50, 0.52, 0.49]))
        self.assertEqual(metrics.daily_std_dev, 0.0)
        self.assertEqual(metrics.max_daily_swing, 0.0)
        self.assertAlmostEqual(metrics.max_hourly_swing, 0.03)

    def test_moderate_zigzag(self):
        # 48 hourly changes of +/-0.02 with zero mean; 24-hour changes vanish
        metrics = analyze_volatility(hourly_history(zigzag(49, amplitude=0.01)))
        self.assertAlmostEqual(metrics.hourly_std_dev, 0.02, places=6)
        self.assertAlmostEqual(metrics.max_hourly_swing, 0.02, places=6)
        self.assertAlmostEqual(metrics.daily_std_dev, 0.0, places=9)
        # 0.02/0.05*60 + 0 + 0.02/0.10*20
        self.assertAlmostEqual(metrics.volatility_score, 28.0, places=4)

    def test_wild_zigzag_saturates_capped_components(self):
        metrics = analyze_volatility(hourly_history(zigzag(49, amplitude=0.1)))
        self.assertAlmostEqual(metrics.volatility_score, 80.0, places=6)

    def test_keeps_price_history(self):
        history = hourly_history([0.5, 0.51, 0.52])
        self.assertEqual(analyze_volatility(history).price_history, tuple(history))

    def test_custom_weights(self):
        params = VolatilityParams(hourly_weight=100.0, daily_weight=0.0, swing_weight=0.0)
        metrics = analyze_volatility(hourly_history(zigzag(49, amplitude=0.1)), params)
        self.assertAlmostEqual(metrics.volatility_score, 100.0)


class TestVolatilityScore(unittest.TestCase):
    def test_zero_inputs(self):
        self.assertEqual(volatility_score(0.0, 0.0, 0.0), 0.0)

    def test_all_components_capped(self):
        self.assertEqual(volatility_score(1.0, 1.0, 1.0), 100.0)

    def test_each_component_bounded_by_weight(self):
        self.assertAlmostEqual(volatility_score(5.0, 0.0, 0.0), 60.0)
        self.assertAlmostEqual(volatility_score(0.0, 5.0, 0.0), 20.0)
        self.assertAlmostEqual(volatility_score(0.0, 0.0, 5.0), 20.0)

    def test_partial_components(self):
        # 0.025/0.05*60 + 0.05/0.10*20 + 0.05/0.10*20
        self.assertAlmostEqual(volatility_score(0.025, 0.05, 0.05), 50.0)

    def test_score_stays_in_range(self):
        for h in (0.0, 0.01, 0.1, 10.0):
            for d in (0.0, 0.05, 1.0):
                for s in (0.0, 0.02, 3.0):
                    score = volatility_score(h, d, s)
                    self.assertGreaterEqual(score, 0.0)
                    self.assertLessEqual(score, 100.0)


class TestVolatilityBands(unittest.TestCase):
    def test_levels(self):
        self.assertEqual(volatility_level(0), VolatilityLevel.VERY_STABLE)
        self.assertEqual(volatility_level(19.9), VolatilityLevel.VERY_STABLE)
        self.assertEqual(volatility_level(20), VolatilityLevel.STABLE)
        self.assertEqual(volatility_level(45), VolatilityLevel.MODERATE)
        self.assertEqual(volatility_level(79.9), VolatilityLevel.VOLATILE)
        self.assertEqual(volatility_level(80), VolatilityLevel.EXTREMELY_VOLATILE)

    def test_min_spread_ratio_bands(self):
        self.assertEqual(recommended_min_spread_ratio(0), 0.25)
        self.assertEqual(recommended_min_spread_ratio(19.99), 0.25)
        self.assertEqual(recommended_min_spread_ratio(20), 0.35)
        self.assertEqual(recommended_min_spread_ratio(40), 0.45)
        self.assertEqual(recommended_min_spread_ratio(60), 0.60)
        self.assertEqual(recommended_min_spread_ratio(80), 0.80)
        self.assertEqual(recommended_min_spread_ratio(100), 0.80)

    def test_min_spread_ratio_non_decreasing(self):
        ratios = [recommended_min_spread_ratio(s) for s in range(0, 101, 5)]
        self.assertEqual(ratios, sorted(ratios))
