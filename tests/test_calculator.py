"""Tests for the pre-trade risk/reward calculator."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from goldjournal.analytics.calculator import get_tick_spec, risk_reward, rr_verdict


class TestRiskReward:
    """Tick distances and dollar amounts per contract spec."""

    def test_gold_long(self):
        result = risk_reward("GC", "long", entry=2045.5, stop_loss=2043.5, take_profit=2049.5)

        assert result.stop_ticks == pytest.approx(20)
        assert result.target_ticks == pytest.approx(40)
        assert result.risk_dollars == pytest.approx(200.0)
        assert result.reward_dollars == pytest.approx(400.0)
        assert result.rr == pytest.approx(2.0)

    def test_micro_gold_short_multiple_contracts(self):
        result = risk_reward("MGC", "short", entry=2045.0, stop_loss=2046.0, take_profit=2042.0, contracts=3)

        assert result.stop_ticks == pytest.approx(10)
        assert result.risk_dollars == pytest.approx(30.0)
        assert result.reward_dollars == pytest.approx(90.0)
        assert result.rr == pytest.approx(3.0)

    def test_es_tick_value(self):
        result = risk_reward("es", "long", entry=5950.0, stop_loss=5949.0)

        assert result.market == "ES"
        assert result.stop_ticks == pytest.approx(4)
        assert result.risk_dollars == pytest.approx(50.0)
        assert result.rr == 0.0

    def test_unknown_market_uses_gold(self):
        assert get_tick_spec("ZZZ") == get_tick_spec("GC")
        assert risk_reward("ZZZ", "long", entry=100.0).market == "GC"

    def test_stop_on_wrong_side_gives_negative_ticks(self):
        result = risk_reward("GC", "long", entry=2000.0, stop_loss=2001.0)

        assert result.stop_ticks == pytest.approx(-10)
        assert result.risk_dollars == pytest.approx(100.0)

    def test_contracts_floor_at_one(self):
        assert risk_reward("GC", "long", entry=2000.0, contracts=0).contracts == 1

    @given(
        entry=st.floats(min_value=1000, max_value=3000),
        distance=st.floats(min_value=0.1, max_value=50),
        contracts=st.integers(min_value=1, max_value=20),
    )
    @settings(max_examples=100)
    def test_direction_symmetry(self, entry: float, distance: float, contracts: int):
        """Mirrored long and short plans carry the same risk."""
        long_plan = risk_reward("GC", "long", entry, entry - distance, entry + distance, contracts)
        short_plan = risk_reward("GC", "short", entry, entry + distance, entry - distance, contracts)

        assert long_plan.risk_dollars == pytest.approx(short_plan.risk_dollars)
        assert long_plan.rr == pytest.approx(short_plan.rr)


class TestVerdict:
    @pytest.mark.parametrize(
        "rr, expected",
        [(0.0, None), (0.5, "poor"), (1.0, "acceptable"), (1.99, "acceptable"), (2.0, "good"), (4.2, "good")],
    )
    def test_thresholds(self, rr: float, expected):
        assert rr_verdict(rr) == expected
