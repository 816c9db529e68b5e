"""Missed trade data model."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from goldjournal.models.trade import Direction

MissedReason = Literal["Hesitation", "Doubt", "Distraction", "Missed signal"]

MISSED_REASONS: tuple[str, ...] = ("Hesitation", "Doubt", "Distraction", "Missed signal")


class PotentialTrade(BaseModel):
    """A valid setup the trader saw but did not take."""

    id: Optional[int] = Field(default=None, description="Database ID")
    market: str = Field(default="GC", min_length=1)
    direction: Direction = Field(..., description="Direction the trade would have gone")
    setup_type: str = Field(default="")
    entry_price: Optional[float] = Field(default=None)
    exit_price: Optional[float] = Field(default=None)
    stop_loss: Optional[float] = Field(default=None)
    take_profit: Optional[float] = Field(default=None)
    potential_pnl: Optional[float] = Field(default=None, description="P&L left on the table")
    r_multiple: Optional[float] = Field(default=None)
    entry_time: Optional[datetime] = Field(default=None)
    reason: Optional[MissedReason] = Field(default=None, description="Why the trade was not taken")
    notes: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.now)

    model_config = {"frozen": True}
