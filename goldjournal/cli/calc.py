"""Trade calculator command for GoldJournal CLI."""

from typing import Optional

import click
from rich.panel import Panel

from goldjournal.analytics.calculator import TICK_SPECS, get_tick_spec, risk_reward, rr_verdict
from goldjournal.cli.common import console, get_config, get_currency

VERDICTS = {
    "good": ("green", "Good R:R - trade aligns with edge"),
    "acceptable": ("yellow", "Acceptable - consider if setup is A+"),
    "poor": ("red", "Poor R:R - reconsider this trade"),
}


@click.command()
@click.option(
    "--market",
    type=click.Choice(sorted(TICK_SPECS), case_sensitive=False),
    default="GC",
    show_default=True,
    help="Contract to size.",
)
@click.option(
    "--direction",
    type=click.Choice(["long", "short"]),
    default="long",
    show_default=True,
    help="Trade direction.",
)
@click.option("--entry", type=float, required=True, help="Planned entry price.")
@click.option("--stop", "stop_loss", type=float, default=None, help="Stop loss price.")
@click.option("--target", "take_profit", type=float, default=None, help="Take profit price.")
@click.option("--contracts", type=int, default=1, show_default=True, help="Number of contracts.")
def calc(
    market: str,
    direction: str,
    entry: float,
    stop_loss: Optional[float],
    take_profit: Optional[float],
    contracts: int,
) -> None:
    """Calculate potential profit/loss before entering a trade.
    
    \b
    Examples:
      goldjournal calc --entry 2045.5 --stop 2043 --target 2051
      goldjournal calc --market MGC --direction short --entry 2045.5 --stop 2047 --contracts 5
    """
    currency = get_currency(get_config())
    spec = get_tick_spec(market)
    result = risk_reward(market, direction, entry, stop_loss, take_profit, contracts)

    plural = "s" if result.contracts != 1 else ""
    lines = [
        f"[dim]{result.market}: tick size {spec.tick_size:.2f} | "
        f"tick value {currency}{spec.tick_value:.2f} per contract[/dim]\n",
    ]

    if stop_loss is not None:
        lines.append(
            f"Risk:    [red]-{currency}{result.risk_dollars:,.2f}[/red] "
            f"[dim]({abs(result.stop_ticks):.0f} ticks | {result.contracts} contract{plural} | "
            f"{currency}{result.risk_dollars / result.contracts:,.2f} per contract)[/dim]"
        )
    if take_profit is not None:
        lines.append(
            f"Reward:  [green]+{currency}{result.reward_dollars:,.2f}[/green] "
            f"[dim]({abs(result.target_ticks):.0f} ticks | {result.contracts} contract{plural} | "
            f"{currency}{result.reward_dollars / result.contracts:,.2f} per contract)[/dim]"
        )

    verdict = rr_verdict(result.rr)
    if verdict is not None:
        color, message = VERDICTS[verdict]
        lines.append(f"\n[bold]R:R  [{color}]1 : {result.rr:.2f}[/{color}][/bold]")
        lines.append(f"[{color}]{message}[/{color}]")

    console.print(Panel(
        "\n".join(lines),
        title="[bold cyan]Trade Calculator[/bold cyan]",
        border_style="cyan",
    ))
