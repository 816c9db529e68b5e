"""Trade data model."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

Direction = Literal["long", "short"]
ExecutionGrade = Literal["A", "B", "C", "F"]
Outcome = Literal["win", "loss", "breakeven"]

EXECUTION_GRADES: tuple[str, ...] = ("A", "B", "C", "F")

SETUP_TYPES: tuple[str, ...] = (
    "FVG",
    "IB",
    "OB",
    "BOS",
    "CHoCH",
    "Liquidity Sweep",
    "ICT Silver Bullet",
    "London Open",
    "NY Open",
    "Other",
)


class Trade(BaseModel):
    """Represents a journaled futures trade."""

    id: Optional[int] = Field(default=None, description="Database ID")
    market: str = Field(default="GC", min_length=1, description="Market symbol (GC, MGC, ...)")
    direction: Direction = Field(..., description="Trade direction")
    setup_type: str = Field(default="", description="Setup that triggered the trade")
    entry_price: Optional[float] = Field(default=None, description="Entry price")
    exit_price: Optional[float] = Field(default=None, description="Exit price")
    stop_loss: Optional[float] = Field(default=None, description="Stop loss price")
    take_profit: Optional[float] = Field(default=None, description="Take profit price")
    position_size: Optional[float] = Field(
        default=None, gt=0, description="Number of contracts"
    )
    entry_time: Optional[datetime] = Field(default=None, description="Entry timestamp")
    exit_time: Optional[datetime] = Field(default=None, description="Exit timestamp")
    execution_grade: Optional[ExecutionGrade] = Field(
        default=None, description="Execution grade (A/B/C/F)"
    )
    outcome: Optional[Outcome] = Field(default=None, description="Trade outcome")
    pnl: Optional[float] = Field(default=None, description="Realized P&L")
    r_multiple: Optional[float] = Field(default=None, description="Realized R-multiple")
    rules_followed: bool = Field(default=True, description="Whether the plan was followed")
    notes: Optional[str] = Field(default=None, description="Free-form notes")
    tags: tuple[str, ...] = Field(default=(), description="Labels")
    created_at: datetime = Field(
        default_factory=datetime.now, description="Record creation timestamp"
    )

    model_config = {"frozen": True}
