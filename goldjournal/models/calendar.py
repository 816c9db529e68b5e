"""Calendar grid data models."""

import datetime as dt

from pydantic import BaseModel, Field

from goldjournal.models.trade import Trade


class CalendarDay(BaseModel):
    """A single cell of the monthly trade calendar."""

    date: dt.date
    in_month: bool = Field(..., description="False for leading/trailing padding days")
    trade_count: int = Field(default=0, ge=0)
    pnl: float = Field(default=0.0)
    trades: list[Trade] = Field(default_factory=list)

    model_config = {"frozen": True}


class MonthSummary(BaseModel):
    """Trade count and net P&L for a month."""

    count: int = Field(default=0, ge=0)
    pnl: float = Field(default=0.0)

    model_config = {"frozen": True}


class CalendarMonth(BaseModel):
    """A Sunday-to-Saturday grid covering one month."""

    year: int
    month: int = Field(..., ge=1, le=12)
    days: list[CalendarDay] = Field(default_factory=list)
    summary: MonthSummary = Field(default_factory=MonthSummary)

    model_config = {"frozen": True}

    @property
    def weeks(self) -> list[list[CalendarDay]]:
        """Grid cells split into rows of seven."""
        return [self.days[i:i + 7] for i in range(0, len(self.days), 7)]
