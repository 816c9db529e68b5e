"""Hypothesis strategies shared by the test modules."""

from datetime import datetime

from hypothesis import strategies as st

from goldjournal.models import SETUP_TYPES, Trade

MIN_TIME = datetime(2020, 1, 1)
MAX_TIME = datetime(2030, 12, 31)


def money():
    """Two-decimal P&L values like the ones traders type in."""
    return st.integers(min_value=-500_000, max_value=500_000).map(lambda cents: cents / 100)


def trade_strategy():
    """Generate valid Trade objects for testing."""
    return st.builds(
        Trade,
        id=st.none(),
        market=st.sampled_from(["GC", "MGC"]),
        direction=st.sampled_from(["long", "short"]),
        setup_type=st.sampled_from(SETUP_TYPES + ("",)),
        entry_time=st.one_of(st.none(), st.datetimes(min_value=MIN_TIME, max_value=MAX_TIME)),
        execution_grade=st.sampled_from([None, "A", "B", "C", "F"]),
        outcome=st.sampled_from([None, "win", "loss", "breakeven"]),
        pnl=st.one_of(st.none(), money()),
        r_multiple=st.one_of(
            st.none(),
            st.floats(min_value=-10.0, max_value=10.0, allow_nan=False, allow_infinity=False),
        ),
        rules_followed=st.booleans(),
        created_at=st.datetimes(min_value=MIN_TIME, max_value=MAX_TIME),
    )


def trades_strategy(min_size: int = 0, max_size: int = 50):
    """Lists of trades."""
    return st.lists(trade_strategy(), min_size=min_size, max_size=max_size)
