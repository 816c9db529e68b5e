"""Cumulative P&L curve."""

from collections.abc import Iterable
from datetime import datetime

from goldjournal.models import PnlCurve, PnlPoint, Trade


def short_date_label(moment: datetime) -> str:
    """Format as month/day without zero padding, e.g. ``1/3``."""
    return f"{moment.month}/{moment.day}"


def _sort_key(moment: datetime) -> float:
    # Naive times are read as local time
    return moment.timestamp()


def cumulative_pnl(trades: Iterable[Trade]) -> PnlCurve:
    """Build the running P&L total ordered by entry time.

    Trades without an entry time have no place on the time axis and are
    dropped. Entry times are compared as instants, so offset-aware times
    keep their real order across a daylight-saving change. Trades sharing an entry time keep their input
    order.

    Args:
        trades: Trades in any order.

    Returns:
        PnlCurve with one point per timed trade. Point values are rounded to
        two decimals; the running sum itself is not.
    """
    timed = sorted(
        (t for t in trades if t.entry_time is not None),
        key=lambda t: _sort_key(t.entry_time),
    )

    cumulative = 0.0
    points = []
    for trade in timed:
        cumulative += trade.pnl or 0.0
        points.append(PnlPoint(date=short_date_label(trade.entry_time), pnl=round(cumulative, 2)))

    return PnlCurve(points=points, final_pnl=points[-1].pnl if points else 0.0)
