"""Journal commands for GoldJournal CLI.

Handles logging trades, browsing the trade history and habit streaks.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional

import click
from pydantic import ValidationError
from rich.table import Table

from goldjournal.analytics.stats import daily_pnl, day_key
from goldjournal.analytics.streaks import (
    PROFITABLE_DAYS,
    REFLECTIONS,
    SESSION_PLANS,
    STREAK_TYPES,
    TRADES_LOGGED,
)
from goldjournal.cli.common import (
    console,
    format_pnl,
    get_config,
    get_currency,
    get_data_store,
    print_error,
)
from goldjournal.models import EXECUTION_GRADES, Trade

logger = logging.getLogger(__name__)

DATETIME_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M"]

STREAK_LABELS = {
    TRADES_LOGGED: "Trades Logged",
    PROFITABLE_DAYS: "Profitable Days",
    REFLECTIONS: "Reflections",
    SESSION_PLANS: "Session Plans",
}


def parse_tags(raw: Optional[str]) -> tuple[str, ...]:
    """Split a comma separated tag string, dropping blanks."""
    if not raw:
        return ()
    return tuple(tag.strip() for tag in raw.split(",") if tag.strip())


@click.command()
@click.option("--market", default=None, help="Market symbol (default from config, usually GC).")
@click.option(
    "--direction",
    type=click.Choice(["long", "short"]),
    required=True,
    help="Trade direction.",
)
@click.option("--setup", "setup_type", default="", help="Setup type (e.g. FVG, OB, BOS).")
@click.option("--entry", "entry_price", type=float, default=None, help="Entry price.")
@click.option("--exit", "exit_price", type=float, default=None, help="Exit price.")
@click.option("--stop", "stop_loss", type=float, default=None, help="Stop loss price.")
@click.option("--target", "take_profit", type=float, default=None, help="Take profit price.")
@click.option("--size", "position_size", type=float, default=None, help="Contracts traded.")
@click.option(
    "--entry-time",
    type=click.DateTime(formats=DATETIME_FORMATS),
    default=None,
    help="Entry time (YYYY-MM-DD HH:MM).",
)
@click.option(
    "--exit-time",
    type=click.DateTime(formats=DATETIME_FORMATS),
    default=None,
    help="Exit time (YYYY-MM-DD HH:MM).",
)
@click.option(
    "--grade",
    "execution_grade",
    type=click.Choice(list(EXECUTION_GRADES)),
    default=None,
    help="Execution grade.",
)
@click.option(
    "--outcome",
    type=click.Choice(["win", "loss", "breakeven"]),
    default=None,
    help="Trade outcome.",
)
@click.option("--pnl", type=float, default=None, help="Realized P&L.")
@click.option("--r", "r_multiple", type=float, default=None, help="Realized R-multiple.")
@click.option(
    "--rules/--no-rules",
    "rules_followed",
    default=True,
    help="Whether you followed your trading plan.",
)
@click.option("--notes", default=None, help="Notes about the trade.")
@click.option("--tags", default=None, help="Comma separated tags.")
def log(
    market: Optional[str],
    direction: str,
    setup_type: str,
    entry_price: Optional[float],
    exit_price: Optional[float],
    stop_loss: Optional[float],
    take_profit: Optional[float],
    position_size: Optional[float],
    entry_time: Optional[datetime],
    exit_time: Optional[datetime],
    execution_grade: Optional[str],
    outcome: Optional[str],
    pnl: Optional[float],
    r_multiple: Optional[float],
    rules_followed: bool,
    notes: Optional[str],
    tags: Optional[str],
) -> None:
    """Record a trade in the journal.
    
    \b
    Examples:
      goldjournal log --direction long --setup FVG --outcome win --pnl 320 --r 2.1
      goldjournal log --direction short --market MGC --entry 2045.5 --stop 2048 \\
          --entry-time "2024-06-03 09:42" --grade B --outcome loss --pnl -25
    """
    config = get_config()
    currency = get_currency(config)

    try:
        trade = Trade(
            market=(market or config["journal"].get("default_market", "GC")).upper(),
            direction=direction,
            setup_type=setup_type,
            entry_price=entry_price,
            exit_price=exit_price,
            stop_loss=stop_loss,
            take_profit=take_profit,
            position_size=position_size,
            entry_time=entry_time,
            exit_time=exit_time,
            execution_grade=execution_grade,
            outcome=outcome,
            pnl=pnl,
            r_multiple=r_multiple,
            rules_followed=rules_followed,
            notes=notes,
            tags=parse_tags(tags),
        )
    except ValidationError as e:
        print_error(f"[red]Invalid trade:[/red]\n\n{e}")
        raise SystemExit(1)

    store = get_data_store(config)
    saved = store.add_trade(trade)
    logger.debug("Logged trade %s dated %s", saved.id, day_key(saved))

    today = date.today()
    streak = store.record_streak(TRADES_LOGGED, today)

    # A profitable-day streak only moves forward with today's trades
    if day_key(saved) == today:
        todays_pnl = daily_pnl(store.get_trades()).get(today, 0.0)
        if todays_pnl > 0:
            store.record_streak(PROFITABLE_DAYS, today)

    side_color = "green" if saved.direction == "long" else "red"
    summary = f"[green]✓ Logged trade #{saved.id}[/green] {saved.market} [{side_color}]{saved.direction}[/{side_color}]"
    if saved.pnl is not None:
        summary += f" {format_pnl(saved.pnl, currency)}"
    console.print(summary)
    console.print(f"[dim]Logging streak: {streak.current_count} day(s)[/dim]")


@click.command()
@click.option("--days", type=int, default=None, help="Only trades entered in the last N days.")
@click.option("--setup", "setup_type", default=None, help="Filter by setup type.")
@click.option(
    "--outcome",
    type=click.Choice(["win", "loss", "breakeven"]),
    default=None,
    help="Filter by outcome.",
)
@click.option("--limit", type=int, default=50, show_default=True, help="Maximum trades to show.")
def trades(days: Optional[int], setup_type: Optional[str], outcome: Optional[str], limit: int) -> None:
    """Display trade history, newest first.
    
    \b
    Examples:
      goldjournal trades                # Latest 50 trades
      goldjournal trades --days 7       # Last week
      goldjournal trades --setup FVG --outcome loss
    """
    config = get_config()
    currency = get_currency(config)
    store = get_data_store(config)

    start = date.today() - timedelta(days=days) if days is not None else None
    history = store.get_trades(start=start, setup_type=setup_type, outcome=outcome, limit=limit)

    if not history:
        console.print("[dim]No trades found[/dim]")
        return

    table = Table(
        title="Trade Journal",
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("ID", justify="right", style="dim")
    table.add_column("Date/Time", style="dim")
    table.add_column("Market", style="bold")
    table.add_column("Side", justify="center")
    table.add_column("Setup")
    table.add_column("Grade", justify="center")
    table.add_column("Outcome", justify="center")
    table.add_column("R", justify="right")
    table.add_column("P&L", justify="right")

    total_pnl = 0.0

    for trade in history:
        side_color = "green" if trade.direction == "long" else "red"
        when = trade.entry_time or trade.created_at
        outcome_color = {"win": "green", "loss": "red"}.get(trade.outcome or "", "yellow")

        if trade.pnl is not None:
            pnl_str = format_pnl(trade.pnl, currency)
            total_pnl += trade.pnl
        else:
            pnl_str = "-"

        table.add_row(
            str(trade.id),
            when.strftime("%Y-%m-%d %H:%M"),
            trade.market,
            f"[{side_color}]{trade.direction}[/{side_color}]",
            trade.setup_type or "-",
            trade.execution_grade or "-",
            f"[{outcome_color}]{trade.outcome}[/{outcome_color}]" if trade.outcome else "-",
            f"{trade.r_multiple:.2f}" if trade.r_multiple is not None else "-",
            pnl_str,
        )

    console.print(table)
    console.print(f"\n[bold]Total Trades:[/bold] {len(history)}")
    console.print(f"[bold]Total P&L:[/bold] {format_pnl(total_pnl, currency)}")


@click.command()
@click.argument("trade_id", type=int)
def delete(trade_id: int) -> None:
    """Delete a trade from the journal.
    
    TRADE_ID is the number shown in the `trades` listing.
    """
    store = get_data_store()

    if not store.delete_trade(trade_id):
        print_error(f"[red]Trade #{trade_id} not found[/red]")
        raise SystemExit(1)

    console.print(f"[green]✓ Deleted trade #{trade_id}[/green]")


@click.command()
def streaks() -> None:
    """Show journaling streaks and personal bests."""
    store = get_data_store()
    saved = {s.streak_type: s for s in store.get_streaks()}

    table = Table(
        title="Streaks",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Streak", style="bold")
    table.add_column("Current", justify="right")
    table.add_column("Best", justify="right")
    table.add_column("Last Logged", style="dim")

    for streak_type in STREAK_TYPES:
        streak = saved.get(streak_type)
        current = streak.current_count if streak else 0
        best = streak.best_count if streak else 0
        last = streak.last_logged_date.isoformat() if streak and streak.last_logged_date else "-"
        color = "yellow" if current > 0 else "dim"
        table.add_row(
            STREAK_LABELS.get(streak_type, streak_type),
            f"[{color}]{current}[/{color}]",
            str(best),
            last,
        )

    console.print(table)
