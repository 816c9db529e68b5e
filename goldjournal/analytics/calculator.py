"""Pre-trade risk/reward calculator for futures contracts."""

from typing import Literal, Optional

from goldjournal.models import RiskReward, TickSpec

TICK_SPECS: dict[str, TickSpec] = {
    "GC": TickSpec(tick_size=0.10, tick_value=10.00),
    "MGC": TickSpec(tick_size=0.10, tick_value=1.00),
    "ES": TickSpec(tick_size=0.25, tick_value=12.50),
    "MES": TickSpec(tick_size=0.25, tick_value=1.25),
}

DEFAULT_MARKET = "GC"


def get_tick_spec(market: str) -> TickSpec:
    """Tick spec for a market, falling back to GC for unknown symbols."""
    return TICK_SPECS.get(market.upper(), TICK_SPECS[DEFAULT_MARKET])


def risk_reward(
    market: str,
    direction: Literal["long", "short"],
    entry: float,
    stop_loss: Optional[float] = None,
    take_profit: Optional[float] = None,
    contracts: int = 1,
) -> RiskReward:
    """Calculate the dollar risk, reward and R:R of a planned trade.

    Args:
        market: Contract symbol (GC, MGC, ES, MES).
        direction: "long" or "short".
        entry: Planned entry price.
        stop_loss: Stop price, if set.
        take_profit: Target price, if set.
        contracts: Number of contracts. Values below 1 count as 1.

    Returns:
        RiskReward. Tick distances are signed (negative means the stop or
        target sits on the wrong side of entry); dollar amounts use their
        magnitude. ``rr`` is 0 unless both legs are priced.
    """
    spec = get_tick_spec(market)
    contracts = max(contracts, 1)
    sign = 1 if direction == "long" else -1

    stop_ticks = 0.0
    target_ticks = 0.0
    risk_dollars = 0.0
    reward_dollars = 0.0

    if stop_loss is not None:
        stop_ticks = sign * (entry - stop_loss) / spec.tick_size
        risk_dollars = abs(stop_ticks) * spec.tick_value * contracts

    if take_profit is not None:
        target_ticks = sign * (take_profit - entry) / spec.tick_size
        reward_dollars = abs(target_ticks) * spec.tick_value * contracts

    rr = reward_dollars / risk_dollars if risk_dollars > 0 and reward_dollars > 0 else 0.0

    return RiskReward(
        market=market.upper() if market.upper() in TICK_SPECS else DEFAULT_MARKET,
        contracts=contracts,
        stop_ticks=stop_ticks,
        target_ticks=target_ticks,
        risk_dollars=risk_dollars,
        reward_dollars=reward_dollars,
        rr=rr,
    )


def rr_verdict(rr: float) -> Optional[str]:
    """Classify an R:R ratio as good (>= 2), acceptable (>= 1) or poor."""
    if rr <= 0:
        return None
    if rr >= 2:
        return "good"
    if rr >= 1:
        return "acceptable"
    return "poor"
