"""Session plan data models."""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

MarketBias = Literal["bullish", "bearish", "neutral"]
LevelType = Literal["support", "resistance", "poi"]
Impact = Literal["high", "medium", "low"]


class KeyLevel(BaseModel):
    """A price level to watch during the session."""

    price: float
    label: str = Field(default="")
    type: LevelType = Field(default="poi", description="Support, resistance or point of interest")

    model_config = {"frozen": True}


class LiquidityZone(BaseModel):
    """A price band where resting orders are expected."""

    price_start: float
    price_end: float
    label: str = Field(default="")

    model_config = {"frozen": True}


class NewsEvent(BaseModel):
    time: str = Field(..., description="Release time, e.g. 08:30")
    event: str = Field(..., min_length=1)
    impact: Impact = Field(default="medium")
    expected: Optional[str] = Field(default=None)
    actual: Optional[str] = Field(default=None)

    model_config = {"frozen": True}


class SessionPlan(BaseModel):
    """Pre-market plan for one trading day plus its end-of-day review."""

    id: Optional[int] = Field(default=None, description="Database ID")
    plan_date: date = Field(default_factory=date.today, description="One plan per day")
    market_bias: Optional[MarketBias] = Field(default=None)
    htf_levels: tuple[KeyLevel, ...] = Field(default=(), description="Higher timeframe levels")
    ltf_levels: tuple[KeyLevel, ...] = Field(default=(), description="Lower timeframe levels")
    liquidity_zones: tuple[LiquidityZone, ...] = Field(default=())
    max_trades: int = Field(default=3, ge=1, description="Trade limit for the day")
    news_events: tuple[NewsEvent, ...] = Field(default=())
    notes: Optional[str] = Field(default=None)
    eod_journal_done: bool = Field(default=False, description="All trades reflected on")
    eod_replay_done: bool = Field(default=False, description="Charts and executions reviewed")
    eod_playbook_done: bool = Field(default=False, description="Playbook updated")
    eod_session_rating: Optional[int] = Field(default=None, ge=1, le=5, description="Session rating, 1-5")
    created_at: datetime = Field(default_factory=datetime.now)

    model_config = {"frozen": True}

    @property
    def eod_complete(self) -> bool:
        """True once every end-of-day item is done and the session is rated."""
        return (
            self.eod_journal_done
            and self.eod_replay_done
            and self.eod_playbook_done
            and self.eod_session_rating is not None
        )
