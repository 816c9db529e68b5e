"""Post-trade review data models."""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

EmotionLevel = Literal["calm", "focused", "anxious", "frustrated", "tilted"]

EMOTION_LEVELS: tuple[str, ...] = ("calm", "focused", "anxious", "frustrated", "tilted")

# Checklist items in display order
RULE_CHECK_ITEMS: tuple[str, ...] = (
    "followed_rules",
    "waited_confirmation",
    "emotion_in_check",
    "valid_setup",
)


class RuleCheck(BaseModel):
    """Discipline checklist answered for a single trade.

    Each item is None when the trader skipped it.
    """

    id: Optional[int] = Field(default=None, description="Database ID")
    trade_id: int = Field(..., description="Trade the checklist belongs to")
    followed_rules: Optional[bool] = Field(default=None, description="Stuck to the playbook and plan")
    waited_confirmation: Optional[bool] = Field(default=None, description="Did not jump in early or chase")
    emotion_in_check: Optional[bool] = Field(default=None, description="Traded with a clear mind")
    valid_setup: Optional[bool] = Field(default=None, description="The setup met all criteria")
    notes: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.now)

    model_config = {"frozen": True}

    @property
    def all_passed(self) -> bool:
        """True when every checklist item was answered yes."""
        return all(getattr(self, item) is True for item in RULE_CHECK_ITEMS)


class Reflection(BaseModel):
    """Emotional and psychological notes on a trade or a session."""

    id: Optional[int] = Field(default=None, description="Database ID")
    trade_id: Optional[int] = Field(default=None, description="Trade reflected on, if any")
    reflection_date: date = Field(default_factory=date.today)
    pre_emotion: Optional[EmotionLevel] = Field(default=None, description="State before the trade")
    during_emotion: Optional[EmotionLevel] = Field(default=None, description="State while in the trade")
    post_emotion: Optional[EmotionLevel] = Field(default=None, description="State after the trade")
    what_confirmed: Optional[str] = Field(default=None, description="What confirmed the entry")
    what_tempted: Optional[str] = Field(default=None, description="What tempted a deviation")
    what_improve: Optional[str] = Field(default=None, description="What to do better next time")
    notes: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.now)

    model_config = {"frozen": True}
