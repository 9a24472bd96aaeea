import unittest

from _helpers import make_market
from lprewards.scoring.placement import (
    allocate_capital,
    compare_markets,
    optimize_advanced,
    optimize_order_placement,
    place_at_ratio,
)


class TestStaticPlacement(unittest.TestCase):
    def test_balanced_uses_35_percent(self):
        placement = optimize_order_placement(1000, make_market(), 5000)
        self.assertAlmostEqual(placement.spread_ratio, 0.35)
        self.assertAlmostEqual(placement.buy_order.price, 0.5 - 0.03 * 0.35)
        self.assertAlmostEqual(placement.expected_daily_reward, 19.11, delta=0.05)

    def test_place_at_ratio_matches_efficiency(self):
        placement = place_at_ratio(1000, make_market(), 5000, 0.5)
        self.assertAlmostEqual(
            placement.capital_efficiency, placement.expected_daily_reward / 1000
        )

    def test_zero_capital(self):
        placement = place_at_ratio(0, make_market(), 5000, 0.5)
        self.assertEqual(placement.capital_efficiency, 0.0)
        self.assertEqual(placement.expected_daily_reward, 0.0)

    def test_advanced_prefers_tighter_quote(self):
        placement = optimize_advanced(1000, make_market(), 5000)
        self.assertAlmostEqual(placement.spread_ratio, 0.25)
        balanced = optimize_order_placement(1000, make_market(), 5000)
        self.assertGreater(placement.expected_daily_reward, balanced.expected_daily_reward)

    def test_advanced_tie_keeps_first_strategy(self):
        placement = optimize_advanced(1000, make_market(reward_pool=0.0), 5000)
        self.assertAlmostEqual(placement.spread_ratio, 0.25)
        self.assertEqual(placement.expected_daily_reward, 0.0)


class TestCompareMarkets(unittest.TestCase):
    def test_sorted_by_roi(self):
        poor = make_market(condition_id="0xpoor", reward_pool=10.0)
        rich = make_market(condition_id="0xrich", reward_pool=500.0)
        ranked = compare_markets(1000, [(poor, 5000), (rich, 5000)])
        self.assertEqual([m.condition_id for m, _, _ in ranked], ["0xrich", "0xpoor"])
        market, placement, roi = ranked[0]
        self.assertAlmostEqual(roi, placement.expected_daily_reward / 1000)

    def test_competition_lowers_roi(self):
        crowded = make_market(condition_id="0xcrowded")
        quiet = make_market(condition_id="0xquiet")
        ranked = compare_markets(1000, [(crowded, 50_000), (quiet, 500)])
        self.assertEqual(ranked[0][0].condition_id, "0xquiet")


class TestAllocateCapital(unittest.TestCase):
    def setUp(self):
        self.markets = [
            (make_market(condition_id="0xa", reward_pool=500.0), 5000),
            (make_market(condition_id="0xb", reward_pool=100.0), 5000),
            (make_market(condition_id="0xc", reward_pool=10.0), 5000),
        ]

    def test_top_markets_share_all_capital(self):
        allocations = allocate_capital(1000, self.markets, max_markets=2)
        self.assertEqual([a.market.condition_id for a in allocations], ["0xa", "0xb"])
        self.assertAlmostEqual(sum(a.allocation for a in allocations), 1000)
        self.assertGreater(allocations[0].allocation, allocations[1].allocation)

    def test_placement_uses_each_markets_competition(self):
        markets = [
            (make_market(condition_id="0xa"), 100),
            (make_market(condition_id="0xb"), 50_000),
        ]
        allocations = allocate_capital(1000, markets, max_markets=2)
        by_id = {a.market.condition_id: a for a in allocations}
        for market, competition in markets:
            alloc = by_id[market.condition_id]
            expected = optimize_order_placement(alloc.allocation, market, competition)
            self.assertAlmostEqual(
                alloc.placement.expected_daily_reward, expected.expected_daily_reward
            )

    def test_equal_split_when_no_roi(self):
        markets = [
            (make_market(condition_id="0xa", reward_pool=0.0), 5000),
            (make_market(condition_id="0xb", reward_pool=0.0), 5000),
        ]
        allocations = allocate_capital(900, markets)
        self.assertEqual(len(allocations), 2)
        for a in allocations:
            self.assertAlmostEqual(a.allocation, 450)

    def test_no_markets(self):
        self.assertEqual(allocate_capital(1000, []), [])
