"""Monthly trade calendar."""

import calendar
from collections.abc import Iterable
from datetime import date, timedelta

from goldjournal.analytics.stats import day_key
from goldjournal.models import CalendarDay, CalendarMonth, MonthSummary, Trade

# Same rule as the best/worst day reducer
trade_date = day_key


def group_by_date(trades: Iterable[Trade]) -> dict[date, list[Trade]]:
    """Group trades by calendar day, in first-seen order."""
    groups: dict[date, list[Trade]] = {}
    for trade in trades:
        groups.setdefault(trade_date(trade), []).append(trade)
    return groups


def grid_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a Sunday-to-Saturday grid covering the month."""
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    # weekday(): Monday=0 .. Sunday=6
    start = first - timedelta(days=(first.weekday() + 1) % 7)
    end = last + timedelta(days=(5 - last.weekday()) % 7)
    return start, end


def month_grid(trades: Iterable[Trade], year: int, month: int) -> CalendarMonth:
    """Lay out trades on a monthly calendar.

    Args:
        trades: Trades to place. Each is dated by entry time, falling back
            to its creation time.
        year: Calendar year to show.
        month: Month to show (1-12).

    Returns:
        CalendarMonth whose days span whole weeks. Padding days from the
        neighbouring months carry their trades too but are flagged
        ``in_month=False`` and excluded from the summary.
    """
    groups = group_by_date(trades)
    start, end = grid_bounds(year, month)

    days = []
    current = start
    while current <= end:
        day_trades = groups.get(current, [])
        days.append(
            CalendarDay(
                date=current,
                in_month=current.month == month,
                trade_count=len(day_trades),
                pnl=sum(t.pnl or 0.0 for t in day_trades),
                trades=day_trades,
            )
        )
        current += timedelta(days=1)

    count = 0
    pnl = 0.0
    for day, day_trades in groups.items():
        if day.year == year and day.month == month:
            count += len(day_trades)
            pnl += sum(t.pnl or 0.0 for t in day_trades)

    return CalendarMonth(
        year=year,
        month=month,
        days=days,
        summary=MonthSummary(count=count, pnl=pnl),
    )
