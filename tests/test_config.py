import os
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from lprewards.config import RewardsConfig


class TestRewardsConfig(unittest.TestCase):
    def test_defaults(self):
        config = RewardsConfig(_env_file=None)
        self.assertEqual(config.scaling_factor, 3.0)
        self.assertEqual(config.spread_options.min_spread_ratio, 0.25)
        self.assertEqual(config.spread_options.max_spread_ratio, 0.80)
        self.assertEqual(config.volatility_params.hourly_weight, 60.0)
        self.assertEqual(config.scoring_params.lenient_midpoint_low, 0.10)

    def test_environment_overrides(self):
        env = {"LPR_CAPITAL_USD": "2500", "LPR_SCALING_FACTOR": "2", "LPR_SPREAD_STEP": "0.1"}
        with patch.dict(os.environ, env):
            config = RewardsConfig(_env_file=None)
        self.assertEqual(config.capital_usd, 2500.0)
        self.assertEqual(config.scoring_params.scaling_factor, 2.0)
        self.assertEqual(config.spread_options.spread_step, 0.1)

    def test_rejects_non_positive_capital(self):
        with self.assertRaises(ValidationError):
            RewardsConfig(_env_file=None, capital_usd=0)

    def test_rejects_non_positive_step(self):
        with self.assertRaises(ValidationError):
            RewardsConfig(_env_file=None, spread_step=0)

    def test_rejects_step_too_fine_to_scan(self):
        with self.assertRaises(ValidationError):
            RewardsConfig(_env_file=None, spread_step=1e-12)
        self.assertEqual(RewardsConfig(_env_file=None, spread_step=0.001).spread_step, 0.001)

    def test_rejects_inverted_ratio_range(self):
        with self.assertRaises(ValidationError):
            RewardsConfig(_env_file=None, min_spread_ratio=0.9, max_spread_ratio=0.5)

    def test_rejects_non_positive_scaling_factor(self):
        with self.assertRaises(ValidationError):
            RewardsConfig(_env_file=None, scaling_factor=0)

    def test_empty_lenient_band_is_allowed(self):
        config = RewardsConfig(_env_file=None, lenient_midpoint_low=0.9, lenient_midpoint_high=0.1)
        self.assertEqual(config.scoring_params.lenient_midpoint_low, 0.9)
