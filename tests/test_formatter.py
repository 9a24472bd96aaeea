import unittest
from datetime import datetime, timedelta, timezone

from _helpers import make_market
from lprewards.reporting.formatter import (
    format_opportunities,
    format_optimization_result,
    format_ranking,
)
from lprewards.scoring.market_analyzer import analyze_market_opportunity
from lprewards.scoring.spread_optimizer import optimize_spread
from lprewards.types import MarketRecord
from lprewards.utils.time import from_unix, report_timestamp


class TestTimeHelpers(unittest.TestCase):
    def test_from_unix_is_aware_utc(self):
        dt = from_unix(1_704_067_200)
        self.assertEqual(dt, datetime(2024, 1, 1, tzinfo=timezone.utc))

    def test_report_timestamp_normalizes_to_utc(self):
        local = datetime(2024, 1, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))
        self.assertEqual(report_timestamp(local), "2024-01-01 12:30 UTC")


class TestFormatter(unittest.TestCase):
    def setUp(self):
        self.market = make_market(condition_id="0xabc", question="Will the bill pass?")
        self.result = optimize_spread(self.market, 1000, [], 5000)

    def test_optimization_result(self):
        text = format_optimization_result(self.result, self.market.question)
        self.assertIn("Market: Will the bill pass?", text)
        self.assertIn("Optimal Spread: 1.05c (35% of max spread)", text)
        self.assertIn("Fill Probability: 55.0%", text)
        self.assertIn("Risk Level: Very High", text)
        self.assertIn("1. YES BID @ $0.4895", text)
        self.assertIn("2. NO BID @ $0.4895", text)
        self.assertIn("Very Stable", text)

    def test_optimization_result_without_question(self):
        text = format_optimization_result(self.result)
        self.assertNotIn("Market:", text)

    def test_ranking_uses_questions(self):
        text = format_ranking([self.result], {"0xabc": "Will the bill pass?"})
        self.assertIn("Will the bill pass?", text)
        self.assertIn("Ranked at", text)

    def test_ranking_falls_back_to_condition_id(self):
        self.assertIn("0xabc", format_ranking([self.result]))

    def test_opportunities(self):
        opp = analyze_market_opportunity(MarketRecord(self.market), 1000, competition=100)
        text = format_opportunities([opp])
        self.assertTrue(text.startswith("1. Will the bill pass?"))
        self.assertIn("competition Medium", text)
