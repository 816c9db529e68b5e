"""Risk/reward calculator models."""

from pydantic import BaseModel, Field


class TickSpec(BaseModel):
    """Tick size and dollar value per tick for a futures contract."""

    tick_size: float = Field(..., gt=0)
    tick_value: float = Field(..., gt=0)

    model_config = {"frozen": True}


class RiskReward(BaseModel):
    """Projected risk and reward for a planned trade."""

    market: str
    contracts: int = Field(..., ge=1)
    stop_ticks: float = Field(default=0.0, description="Ticks from entry to stop")
    target_ticks: float = Field(default=0.0, description="Ticks from entry to target")
    risk_dollars: float = Field(default=0.0, ge=0)
    reward_dollars: float = Field(default=0.0, ge=0)
    rr: float = Field(default=0.0, ge=0, description="Reward / risk")

    model_config = {"frozen": True}
