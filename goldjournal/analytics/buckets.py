"""Categorical bucketing of trades for the edge dashboard."""

from collections.abc import Iterable
from math import inf

from goldjournal.models import (
    EXECUTION_GRADES,
    GradeBucket,
    RMultipleBucket,
    SetupBucket,
    Trade,
    WeekdayBucket,
)

UNKNOWN_SETUP = "Unknown"

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri")

# (label, lower inclusive, upper exclusive)
R_MULTIPLE_RANGES: tuple[tuple[str, float, float], ...] = (
    ("< -2R", -inf, -2.0),
    ("-2R to -1R", -2.0, -1.0),
    ("-1R to 0R", -1.0, 0.0),
    ("0R to 1R", 0.0, 1.0),
    ("1R to 2R", 1.0, 2.0),
    ("> 2R", 2.0, inf),
)


def by_setup_type(trades: Iterable[Trade]) -> list[SetupBucket]:
    """Count wins and losses per setup type.

    Trades with an empty setup go under "Unknown". Breakeven and ungraded
    outcomes still create their setup's bucket but add to neither count.

    Returns:
        Buckets sorted by wins + losses, most active first.
    """
    counts: dict[str, list[int]] = {}
    for trade in trades:
        key = trade.setup_type or UNKNOWN_SETUP
        tally = counts.setdefault(key, [0, 0])
        if trade.outcome == "win":
            tally[0] += 1
        elif trade.outcome == "loss":
            tally[1] += 1

    buckets = [
        SetupBucket(setup=setup, wins=wins, losses=losses)
        for setup, (wins, losses) in counts.items()
    ]
    return sorted(buckets, key=lambda b: b.wins + b.losses, reverse=True)


def by_weekday(trades: Iterable[Trade]) -> list[WeekdayBucket]:
    """Win rate by weekday of entry, Monday through Friday.

    Trades need both an entry time and an outcome to be counted. Weekend
    entries are ignored. Always returns five buckets.
    """
    wins = [0] * 5
    totals = [0] * 5
    for trade in trades:
        if trade.entry_time is None or not trade.outcome:
            continue
        weekday = trade.entry_time.weekday()
        if weekday > 4:
            continue
        totals[weekday] += 1
        if trade.outcome == "win":
            wins[weekday] += 1

    return [
        WeekdayBucket(
            day=label,
            win_rate=(wins[i] / totals[i] * 100) if totals[i] > 0 else 0.0,
            total=totals[i],
        )
        for i, label in enumerate(WEEKDAY_LABELS)
    ]


def by_execution_grade(trades: Iterable[Trade]) -> list[GradeBucket]:
    """Count trades per execution grade in A, B, C, F order, skipping empty grades."""
    counts = dict.fromkeys(EXECUTION_GRADES, 0)
    for trade in trades:
        if trade.execution_grade in counts:
            counts[trade.execution_grade] += 1
    return [GradeBucket(grade=grade, count=count) for grade, count in counts.items() if count > 0]


def r_multiple_tone(lower: float) -> str:
    """Ranges starting at 0R or above are win-toned, the rest loss-toned."""
    return "win" if lower >= 0 else "loss"


def by_r_multiple(trades: Iterable[Trade]) -> list[RMultipleBucket]:
    """Distribute trades over the fixed R-multiple ranges.

    Trades without an R-multiple are skipped. Each remaining trade lands in
    exactly one range.
    """
    counts = [0] * len(R_MULTIPLE_RANGES)
    for trade in trades:
        r = trade.r_multiple
        if r is None:
            continue
        for i, (_, lower, upper) in enumerate(R_MULTIPLE_RANGES):
            if lower <= r < upper:
                counts[i] += 1
                break

    return [
        RMultipleBucket(
            label=label,
            lower=lower,
            upper=upper,
            count=counts[i],
            tone=r_multiple_tone(lower),
        )
        for i, (label, lower, upper) in enumerate(R_MULTIPLE_RANGES)
    ]
