"""Result models produced by the analytics engine."""

import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, Field

Tone = Literal["win", "loss"]


class DayPnl(BaseModel):
    """Net P&L for one calendar day."""

    date: dt.date = Field(..., description="Calendar day")
    pnl: float = Field(..., description="Summed P&L for the day")

    model_config = {"frozen": True}


class DashboardStats(BaseModel):
    """Headline performance metrics over a set of trades."""

    total_trades: int = Field(..., ge=0, description="Number of trades")
    win_rate: float = Field(..., ge=0, le=100, description="Win rate percentage")
    avg_rr: float = Field(..., description="Mean R-multiple")
    total_pnl: float = Field(..., description="Net P&L")
    best_day: Optional[DayPnl] = Field(default=None, description="Most profitable day")
    worst_day: Optional[DayPnl] = Field(default=None, description="Least profitable day")
    profit_factor: float = Field(..., ge=0, description="Gross wins / gross losses")
    avg_win: float = Field(..., ge=0, description="Mean winning P&L")
    avg_loss: float = Field(..., ge=0, description="Mean losing P&L magnitude")

    model_config = {"frozen": True}


class SetupBucket(BaseModel):
    """Win/loss counts for one setup type."""

    setup: str
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


class WeekdayBucket(BaseModel):
    """Win rate for one weekday."""

    day: str = Field(..., description="Short weekday label (Mon..Fri)")
    win_rate: float = Field(..., ge=0, le=100)
    total: int = Field(..., ge=0)

    model_config = {"frozen": True}


class GradeBucket(BaseModel):
    """Trade count for one execution grade."""

    grade: str
    count: int = Field(..., gt=0)

    model_config = {"frozen": True}


class RMultipleBucket(BaseModel):
    """Trade count for one half-open R-multiple range [lower, upper)."""

    label: str
    lower: float
    upper: float
    count: int = Field(default=0, ge=0)
    tone: Tone

    model_config = {"frozen": True}


class PnlPoint(BaseModel):
    """One point on the cumulative P&L curve."""

    date: str = Field(..., description="Short month/day label")
    pnl: float = Field(..., description="Cumulative P&L, rounded to cents")

    model_config = {"frozen": True}


class PnlCurve(BaseModel):
    """Cumulative P&L series ordered by entry time."""

    points: list[PnlPoint] = Field(default_factory=list)
    final_pnl: float = Field(default=0.0, description="Last cumulative value")

    model_config = {"frozen": True}


class RuleAdherence(BaseModel):
    """Share of trades taken according to plan."""

    total_trades: int = Field(default=0, ge=0)
    rules_followed: int = Field(default=0, ge=0)
    rules_broken: int = Field(default=0, ge=0)
    adherence_rate: float = Field(default=0.0, ge=0, le=100, description="Followed / total * 100")

    model_config = {"frozen": True}


class RuleCheckBucket(BaseModel):
    """Pass rate for one discipline checklist item."""

    item: str
    passed: int = Field(default=0, ge=0)
    answered: int = Field(default=0, ge=0, description="Checks where the item was not skipped")
    pass_rate: float = Field(default=0.0, ge=0, le=100)

    model_config = {"frozen": True}


class EmotionBucket(BaseModel):
    """How often an emotion was recorded at each stage of a trade."""

    emotion: str
    pre: int = Field(default=0, ge=0)
    during: int = Field(default=0, ge=0)
    post: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def total(self) -> int:
        return self.pre + self.during + self.post


class MissedTradeSummary(BaseModel):
    """P&L left on the table by trades not taken."""

    count: int = Field(default=0, ge=0)
    total_potential_pnl: float = Field(default=0.0)
    avg_potential_pnl: float = Field(default=0.0)
    top_reason: Optional[str] = Field(default=None, description="Most common reason")
    top_reason_count: int = Field(default=0, ge=0)

    model_config = {"frozen": True}
