"""Dashboard metric reducers.

Every function here is pure: it takes a snapshot of trades and returns a new
result without touching the input. Missing numeric fields fall back to the
documented defaults instead of raising.
"""

from collections.abc import Iterable, Sequence
from datetime import date
from typing import Optional

from goldjournal.models import DashboardStats, DayPnl, Trade


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def day_key(trade: Trade) -> date:
    """Calendar day a trade belongs to.

    Uses the entry time when the trade has one, otherwise the day the record
    was created.
    """
    if trade.entry_time is not None:
        return trade.entry_time.date()
    return trade.created_at.date()


def daily_pnl(trades: Iterable[Trade]) -> dict[date, float]:
    """Sum P&L per calendar day.

    Keys keep the order in which each day is first seen.
    """
    days: dict[date, float] = {}
    for trade in trades:
        key = day_key(trade)
        days[key] = days.get(key, 0.0) + (trade.pnl or 0.0)
    return days


def best_and_worst_day(trades: Iterable[Trade]) -> tuple[Optional[DayPnl], Optional[DayPnl]]:
    """Find the days with the highest and lowest summed P&L.

    Ties go to the day seen first.
    """
    days = daily_pnl(trades)
    if not days:
        return None, None

    # max/min return the first extreme item, which gives the tie-break
    best = max(days.items(), key=lambda item: item[1])
    worst = min(days.items(), key=lambda item: item[1])
    return DayPnl(date=best[0], pnl=best[1]), DayPnl(date=worst[0], pnl=worst[1])


def compute_stats(trades: Sequence[Trade]) -> DashboardStats:
    """Calculate dashboard metrics from a list of trades.

    Args:
        trades: Trades to summarise. Order only matters for breaking ties
            between equally good (or bad) days.

    Returns:
        DashboardStats. An empty list yields all zeros and no best/worst day.

    Notes:
        Wins and losses are decided by ``outcome``, not by the sign of
        ``pnl``. A win with zero or missing P&L is left out of ``avg_win``,
        and ``profit_factor`` is 0 whenever there are no measured losses.
    """
    if not trades:
        return DashboardStats(
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

    wins = [t for t in trades if t.outcome == "win"]
    losses = [t for t in trades if t.outcome == "loss"]
    win_rate = len(wins) / len(trades) * 100

    r_multiples = [t.r_multiple for t in trades if t.r_multiple is not None]
    avg_rr = _mean(r_multiples)

    total_pnl = sum(t.pnl or 0.0 for t in trades)

    win_pnls = [p for p in (t.pnl or 0.0 for t in wins) if p > 0]
    loss_pnls = [p for p in (abs(t.pnl or 0.0) for t in losses) if p > 0]
    avg_win = _mean(win_pnls)
    avg_loss = _mean(loss_pnls)
    profit_factor = sum(win_pnls) / sum(loss_pnls) if avg_loss > 0 else 0.0

    best_day, worst_day = best_and_worst_day(trades)

    return DashboardStats(
        total_trades=len(trades),
        win_rate=win_rate,
        avg_rr=avg_rr,
        total_pnl=total_pnl,
        best_day=best_day,
        worst_day=worst_day,
        profit_factor=profit_factor,
        avg_win=avg_win,
        avg_loss=avg_loss,
    )
