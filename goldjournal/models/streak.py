"""Streak data model."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class Streak(BaseModel):
    """Consecutive-day counter for a journaling habit."""

    streak_type: str = Field(..., min_length=1, description="Habit being tracked")
    current_count: int = Field(default=0, ge=0)
    best_count: int = Field(default=0, ge=0)
    last_logged_date: Optional[date] = Field(default=None)

    model_config = {"frozen": True}
