"""Trade performance analytics."""

from goldjournal.analytics.buckets import (
    by_execution_grade,
    by_r_multiple,
    by_setup_type,
    by_weekday,
)
from goldjournal.analytics.calculator import risk_reward, rr_verdict
from goldjournal.analytics.calendar import group_by_date, month_grid
from goldjournal.analytics.discipline import (
    by_emotion,
    rule_adherence,
    rule_check_breakdown,
    summarize_missed,
)
from goldjournal.analytics.stats import compute_stats, daily_pnl
from goldjournal.analytics.streaks import advance_streak
from goldjournal.analytics.timeseries import cumulative_pnl

__all__ = [
    "advance_streak",
    "by_emotion",
    "by_execution_grade",
    "by_r_multiple",
    "by_setup_type",
    "by_weekday",
    "compute_stats",
    "cumulative_pnl",
    "daily_pnl",
    "group_by_date",
    "month_grid",
    "risk_reward",
    "rr_verdict",
    "rule_adherence",
    "rule_check_breakdown",
    "summarize_missed",
]
