"""Data models for GoldJournal."""

from goldjournal.models.calculator import RiskReward, TickSpec
from goldjournal.models.calendar import CalendarDay, CalendarMonth, MonthSummary
from goldjournal.models.playbook import RULE_TYPES, PlaybookEntry
from goldjournal.models.potential import MISSED_REASONS, PotentialTrade
from goldjournal.models.review import EMOTION_LEVELS, RULE_CHECK_ITEMS, Reflection, RuleCheck
from goldjournal.models.session import KeyLevel, LiquidityZone, NewsEvent, SessionPlan
from goldjournal.models.stats import (
    DashboardStats,
    DayPnl,
    EmotionBucket,
    GradeBucket,
    MissedTradeSummary,
    PnlCurve,
    PnlPoint,
    RMultipleBucket,
    RuleAdherence,
    RuleCheckBucket,
    SetupBucket,
    WeekdayBucket,
)
from goldjournal.models.streak import Streak
from goldjournal.models.trade import EXECUTION_GRADES, SETUP_TYPES, Trade

__all__ = [
    "CalendarDay",
    "CalendarMonth",
    "DashboardStats",
    "DayPnl",
    "EMOTION_LEVELS",
    "EXECUTION_GRADES",
    "EmotionBucket",
    "GradeBucket",
    "KeyLevel",
    "LiquidityZone",
    "MISSED_REASONS",
    "MissedTradeSummary",
    "MonthSummary",
    "NewsEvent",
    "PlaybookEntry",
    "PnlCurve",
    "PnlPoint",
    "PotentialTrade",
    "RMultipleBucket",
    "RULE_CHECK_ITEMS",
    "RULE_TYPES",
    "Reflection",
    "RiskReward",
    "RuleAdherence",
    "RuleCheck",
    "RuleCheckBucket",
    "SETUP_TYPES",
    "SessionPlan",
    "SetupBucket",
    "Streak",
    "TickSpec",
    "Trade",
    "WeekdayBucket",
]
