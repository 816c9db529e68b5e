"""Tests for the dashboard metric reducers.

**Feature: goldjournal-analytics**
"""

import math
from datetime import date, datetime

import pandas as pd
from hypothesis import given, settings
from hypothesis import strategies as st

from goldjournal.analytics.stats import best_and_worst_day, compute_stats, daily_pnl, day_key
from goldjournal.models import DashboardStats, Trade
from trade_strategies import trades_strategy


def make_trade(**kwargs) -> Trade:
    kwargs.setdefault("direction", "long")
    kwargs.setdefault("created_at", datetime(2024, 1, 15, 12, 0))
    return Trade(**kwargs)


class TestEmptyInput:
    """An empty journal produces the documented zero result."""

    def test_empty_stats(self):
        result = compute_stats([])

        assert result == DashboardStats(
            total_trades=0,
            win_rate=0.0,
            avg_rr=0.0,
            total_pnl=0.0,
            best_day=None,
            worst_day=None,
            profit_factor=0.0,
            avg_win=0.0,
            avg_loss=0.0,
        )


class TestHeadlineMetrics:
    """Hand-checked examples for the scalar metrics."""

    def test_one_win_one_loss(self):
        trades = [
            make_trade(outcome="win", pnl=100.0),
            make_trade(outcome="loss", pnl=-50.0),
        ]

        result = compute_stats(trades)

        assert result.total_trades == 2
        assert result.win_rate == 50.0
        assert result.total_pnl == 50.0
        assert result.avg_win == 100.0
        assert result.avg_loss == 50.0
        assert result.profit_factor == 2.0

    def test_zero_pnl_win_excluded_from_avg_win(self):
        base = [
            make_trade(outcome="win", pnl=100.0),
            make_trade(outcome="win", pnl=300.0),
            make_trade(outcome="loss", pnl=-50.0),
        ]
        with_flat_win = base + [make_trade(outcome="win", pnl=0.0)]

        assert compute_stats(with_flat_win).avg_win == compute_stats(base).avg_win == 200.0
        # It still counts as a win for the win rate
        assert compute_stats(with_flat_win).win_rate == 75.0

    def test_win_without_pnl_excluded_from_avg_win(self):
        trades = [make_trade(outcome="win", pnl=80.0), make_trade(outcome="win")]

        assert compute_stats(trades).avg_win == 80.0

    def test_wins_without_losses_give_zero_profit_factor(self):
        trades = [make_trade(outcome="win", pnl=100.0), make_trade(outcome="win", pnl=40.0)]

        result = compute_stats(trades)

        assert result.avg_loss == 0.0
        assert result.profit_factor == 0.0

    def test_loss_magnitude_uses_absolute_value(self):
        trades = [
            make_trade(outcome="loss", pnl=-30.0),
            make_trade(outcome="loss", pnl=10.0),
            make_trade(outcome="loss", pnl=0.0),
        ]

        assert compute_stats(trades).avg_loss == 20.0

    def test_classification_follows_outcome_not_pnl_sign(self):
        trades = [
            make_trade(outcome="loss", pnl=120.0),
            make_trade(outcome="breakeven", pnl=500.0),
            make_trade(pnl=75.0),
        ]

        result = compute_stats(trades)

        assert result.win_rate == 0.0
        assert result.avg_win == 0.0
        assert result.avg_loss == 120.0
        assert result.total_pnl == 695.0

    def test_avg_rr_ignores_missing_values(self):
        trades = [
            make_trade(r_multiple=2.0),
            make_trade(r_multiple=-1.0),
            make_trade(),
        ]

        assert compute_stats(trades).avg_rr == 0.5

    def test_avg_rr_zero_when_none_present(self):
        assert compute_stats([make_trade(pnl=10.0)]).avg_rr == 0.0


class TestBestAndWorstDay:
    """Days are keyed by entry time, falling back to creation time."""

    def test_day_key_prefers_entry_time(self):
        trade = make_trade(entry_time=datetime(2024, 3, 4, 9, 30), created_at=datetime(2024, 3, 9))

        assert day_key(trade) == date(2024, 3, 4)

    def test_day_key_falls_back_to_created_at(self):
        trade = make_trade(created_at=datetime(2024, 3, 9, 23, 59))

        assert day_key(trade) == date(2024, 3, 9)

    def test_best_and_worst(self):
        trades = [
            make_trade(entry_time=datetime(2024, 3, 4, 9), pnl=100.0),
            make_trade(entry_time=datetime(2024, 3, 4, 11), pnl=-30.0),
            make_trade(entry_time=datetime(2024, 3, 5, 10), pnl=-200.0),
            make_trade(created_at=datetime(2024, 3, 6, 8), pnl=150.0),
        ]

        result = compute_stats(trades)

        assert result.best_day.date == date(2024, 3, 6)
        assert result.best_day.pnl == 150.0
        assert result.worst_day.date == date(2024, 3, 5)
        assert result.worst_day.pnl == -200.0

    def test_ties_go_to_first_day_seen(self):
        trades = [
            make_trade(entry_time=datetime(2024, 3, 8), pnl=50.0),
            make_trade(entry_time=datetime(2024, 3, 4), pnl=50.0),
        ]

        best, worst = best_and_worst_day(trades)

        assert best.date == date(2024, 3, 8)
        assert worst.date == date(2024, 3, 8)

    def test_single_day_is_both_best_and_worst(self):
        best, worst = best_and_worst_day([make_trade(entry_time=datetime(2024, 3, 4), pnl=-5.0)])

        assert best == worst

    def test_missing_pnl_counts_as_zero(self):
        assert daily_pnl([make_trade(entry_time=datetime(2024, 3, 4))]) == {date(2024, 3, 4): 0.0}


class TestStatsProperties:
    """
    **Feature: goldjournal-analytics, Metric Reducer Properties**

    *For any* trade collection the reducers stay within their documented
    ranges and are pure functions of the input.
    """

    @given(trades=trades_strategy())
    @settings(max_examples=100)
    def test_win_rate_bounds(self, trades: list[Trade]):
        result = compute_stats(trades)

        assert 0 <= result.win_rate <= 100
        if not trades:
            assert result.win_rate == 0

    @given(trades=trades_strategy())
    @settings(max_examples=100)
    def test_total_pnl_equals_sum(self, trades: list[Trade]):
        result = compute_stats(trades)

        expected = sum(t.pnl for t in trades if t.pnl is not None)
        assert math.isclose(result.total_pnl, expected, abs_tol=1e-6)

    @given(trades=trades_strategy(), data=st.data())
    @settings(max_examples=50)
    def test_total_pnl_order_independent(self, trades: list[Trade], data):
        shuffled = data.draw(st.permutations(trades))

        assert math.isclose(
            compute_stats(trades).total_pnl,
            compute_stats(shuffled).total_pnl,
            abs_tol=1e-6,
        )

    @given(trades=trades_strategy())
    @settings(max_examples=50)
    def test_idempotent(self, trades: list[Trade]):
        snapshot = [t.model_copy() for t in trades]

        assert compute_stats(trades) == compute_stats(trades)
        assert trades == snapshot

    @given(trades=trades_strategy(min_size=1))
    @settings(max_examples=100)
    def test_daily_pnl_matches_pandas_groupby(self, trades: list[Trade]):
        frame = pd.DataFrame({
            "day": [day_key(t) for t in trades],
            "pnl": [t.pnl or 0.0 for t in trades],
        })
        expected = frame.groupby("day", sort=False)["pnl"].sum()

        result = daily_pnl(trades)

        assert list(result.keys()) == list(expected.index)
        for day, total in expected.items():
            assert math.isclose(result[day], total, abs_tol=1e-6)

    @given(trades=trades_strategy(min_size=1))
    @settings(max_examples=100)
    def test_best_day_is_max_and_worst_day_is_min(self, trades: list[Trade]):
        days = daily_pnl(trades)
        result = compute_stats(trades)

        assert result.best_day.pnl == max(days.values())
        assert result.worst_day.pnl == min(days.values())
        assert result.best_day.pnl >= result.worst_day.pnl

    @given(trades=trades_strategy())
    @settings(max_examples=100)
    def test_profit_factor_zero_without_losses(self, trades: list[Trade]):
        result = compute_stats(trades)

        if result.avg_loss == 0:
            assert result.profit_factor == 0
        else:
            assert result.profit_factor >= 0
