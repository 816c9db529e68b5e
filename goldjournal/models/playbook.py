"""Playbook data model."""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

RuleType = Literal["trade", "avoid", "execution", "insight"]

RULE_TYPES: tuple[str, ...] = ("trade", "avoid", "execution", "insight")


class PlaybookEntry(BaseModel):
    """A trading rule or insight distilled from past trades."""

    id: Optional[int] = Field(default=None, description="Database ID")
    rule_type: RuleType = Field(default="trade")
    title: str = Field(..., min_length=1)
    description: Optional[str] = Field(default=None)
    setup_type: Optional[str] = Field(default=None, description="Setup the rule applies to")
    conditions: Optional[dict[str, Any]] = Field(default=None, description="Free-form conditions")
    evidence_trade_ids: tuple[int, ...] = Field(default=(), description="Trades that back the rule")
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    model_config = {"frozen": True}
