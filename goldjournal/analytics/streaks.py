"""Daily habit streaks."""

from datetime import date, timedelta
from typing import Optional

from goldjournal.models import Streak

TRADES_LOGGED = "trades_logged"
PROFITABLE_DAYS = "profitable_days"
REFLECTIONS = "reflections"
SESSION_PLANS = "session_plans"

STREAK_TYPES = (TRADES_LOGGED, PROFITABLE_DAYS, REFLECTIONS, SESSION_PLANS)


def advance_streak(streak: Optional[Streak], streak_type: str, today: date) -> Streak:
    """Record activity for ``today`` and return the updated streak.

    Logging twice on the same day is a no-op. A gap of more than one day
    resets the current count to 1; the best count never drops.
    """
    if streak is None:
        return Streak(
            streak_type=streak_type,
            current_count=1,
            best_count=1,
            last_logged_date=today,
        )

    if streak.last_logged_date == today:
        return streak

    if streak.last_logged_date == today - timedelta(days=1):
        count = streak.current_count + 1
    else:
        count = 1

    return streak.model_copy(
        update={
            "current_count": count,
            "best_count": max(count, streak.best_count),
            "last_logged_date": today,
        }
    )
