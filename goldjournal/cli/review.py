"""Review commands for GoldJournal CLI.

Reflections and emotion tracking, per-trade rule checklists, rule
adherence and the log of missed trades.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from goldjournal.analytics import (
    by_emotion,
    rule_adherence,
    rule_check_breakdown,
    summarize_missed,
)
from goldjournal.analytics.streaks import REFLECTIONS
from goldjournal.cli.common import (
    console,
    format_pnl,
    get_config,
    get_currency,
    get_data_store,
    print_error,
)
from goldjournal.cli.journal import DATETIME_FORMATS
from goldjournal.models import (
    EMOTION_LEVELS,
    MISSED_REASONS,
    PotentialTrade,
    Reflection,
    RuleCheck,
)

logger = logging.getLogger(__name__)

CHECK_LABELS = {
    "followed_rules": "Followed trading rules",
    "waited_confirmation": "Waited for confirmation",
    "emotion_in_check": "Emotions in check",
    "valid_setup": "Valid setup",
}

EMOTION_COLORS = {
    "calm": "green",
    "focused": "blue",
    "anxious": "yellow",
    "frustrated": "dark_orange",
    "tilted": "red",
}


def _emotion(value: Optional[str]) -> str:
    if value is None:
        return "-"
    color = EMOTION_COLORS.get(value, "white")
    return f"[{color}]{value}[/{color}]"


@click.command()
@click.option("--trade", "trade_id", type=int, default=None, help="Trade ID the reflection is about.")
@click.option(
    "--date",
    "reflection_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Day of the reflection (YYYY-MM-DD). Defaults to today.",
)
@click.option("--pre", "pre_emotion", type=click.Choice(list(EMOTION_LEVELS)), default=None, help="How you felt before the trade.")
@click.option("--during", "during_emotion", type=click.Choice(list(EMOTION_LEVELS)), default=None, help="How you felt in the trade.")
@click.option("--post", "post_emotion", type=click.Choice(list(EMOTION_LEVELS)), default=None, help="How you felt after the trade.")
@click.option("--confirmed", "what_confirmed", default=None, help="What confirmed the entry.")
@click.option("--tempted", "what_tempted", default=None, help="What tempted you to deviate.")
@click.option("--improve", "what_improve", default=None, help="What to do better next time.")
@click.option("--notes", default=None, help="Anything else.")
def reflect(
    trade_id: Optional[int],
    reflection_date: Optional[datetime],
    pre_emotion: Optional[str],
    during_emotion: Optional[str],
    post_emotion: Optional[str],
    what_confirmed: Optional[str],
    what_tempted: Optional[str],
    what_improve: Optional[str],
    notes: Optional[str],
) -> None:
    """Record how a trade or session went emotionally.

    \b
    Examples:
      goldjournal reflect --trade 12 --pre calm --during anxious --post frustrated
      goldjournal reflect --improve "Wait for the 5m close" --tempted "FOMO after the sweep"
    """
    content = (pre_emotion, during_emotion, post_emotion, what_confirmed, what_tempted, what_improve, notes)
    if all(value is None for value in content):
        print_error("[red]Nothing to record.[/red]\n\nPass at least one emotion or note.")
        raise SystemExit(1)

    store = get_data_store()
    if trade_id is not None and store.get_trade(trade_id) is None:
        print_error(f"[red]Trade #{trade_id} not found[/red]")
        raise SystemExit(1)

    day = reflection_date.date() if reflection_date else date.today()
    saved = store.add_reflection(Reflection(
        trade_id=trade_id,
        reflection_date=day,
        pre_emotion=pre_emotion,
        during_emotion=during_emotion,
        post_emotion=post_emotion,
        what_confirmed=what_confirmed,
        what_tempted=what_tempted,
        what_improve=what_improve,
        notes=notes,
    ))

    today = date.today()
    streak = store.record_streak(REFLECTIONS, today) if day == today else None

    target = f" on trade #{trade_id}" if trade_id is not None else ""
    console.print(f"[green]✓ Saved reflection #{saved.id}{target}[/green]")
    if streak is not None:
        console.print(f"[dim]Reflection streak: {streak.current_count} day(s)[/dim]")


@click.command()
@click.option("--trade", "trade_id", type=int, default=None, help="Only reflections on this trade.")
@click.option("--limit", type=click.IntRange(min=1), default=20, show_default=True, help="Maximum reflections to show.")
def reflections(trade_id: Optional[int], limit: int) -> None:
    """Show recent reflections and how often each emotion came up."""
    store = get_data_store()
    history = store.get_reflections(trade_id=trade_id, limit=limit)

    if not history:
        console.print(Panel(
            "[dim]No reflections yet. Use 'goldjournal reflect' after your next trade.[/dim]",
            title="[bold]Reflections[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Reflections", show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Date", style="dim")
    table.add_column("Trade", justify="right")
    table.add_column("Pre")
    table.add_column("During")
    table.add_column("Post")
    table.add_column("Improve")

    for reflection in history:
        table.add_row(
            str(reflection.id),
            reflection.reflection_date.isoformat(),
            f"#{reflection.trade_id}" if reflection.trade_id is not None else "-",
            _emotion(reflection.pre_emotion),
            _emotion(reflection.during_emotion),
            _emotion(reflection.post_emotion),
            reflection.what_improve or "-",
        )
    console.print(table)

    emotions = by_emotion(history)
    if emotions:
        emotion_table = Table(title="Emotion Tracker", show_header=True, header_style="bold cyan")
        emotion_table.add_column("Emotion")
        emotion_table.add_column("Before", justify="right")
        emotion_table.add_column("During", justify="right")
        emotion_table.add_column("After", justify="right")
        for bucket in emotions:
            emotion_table.add_row(_emotion(bucket.emotion), str(bucket.pre), str(bucket.during), str(bucket.post))
        console.print(emotion_table)


@click.command()
@click.argument("trade_id", type=int)
@click.option("--followed/--broke-rules", "followed_rules", default=True, help="Stuck to your playbook and plan.")
@click.option("--waited/--chased", "waited_confirmation", default=True, help="Waited for confirmation instead of chasing.")
@click.option("--calm/--emotional", "emotion_in_check", default=True, help="Traded with a clear mind.")
@click.option("--valid-setup/--invalid-setup", "valid_setup", default=True, help="The setup met all criteria.")
@click.option("--notes", default=None, help="Notes on the checklist.")
def check(
    trade_id: int,
    followed_rules: bool,
    waited_confirmation: bool,
    emotion_in_check: bool,
    valid_setup: bool,
    notes: Optional[str],
) -> None:
    """Answer the discipline checklist for a trade.

    Every item defaults to yes; flip the ones you broke. The trade's
    rules-followed flag is updated to match.

    \b
    Examples:
      goldjournal check 12
      goldjournal check 13 --chased --emotional --notes "Revenge trade"
    """
    store = get_data_store()
    trade = store.get_trade(trade_id)
    if trade is None:
        print_error(f"[red]Trade #{trade_id} not found[/red]")
        raise SystemExit(1)

    saved = store.add_rule_check(RuleCheck(
        trade_id=trade_id,
        followed_rules=followed_rules,
        waited_confirmation=waited_confirmation,
        emotion_in_check=emotion_in_check,
        valid_setup=valid_setup,
        notes=notes,
    ))
    if trade.rules_followed != followed_rules:
        store.update_trade(trade.model_copy(update={"rules_followed": followed_rules}))
        logger.debug("Trade %s rules_followed set to %s", trade_id, followed_rules)

    for item, label in CHECK_LABELS.items():
        mark = "[green]✓[/green]" if getattr(saved, item) else "[red]✗[/red]"
        console.print(f"  {mark} {label}")

    if saved.all_passed:
        console.print(f"[green]✓ Trade #{trade_id} passed every check[/green]")
    else:
        console.print(f"[yellow]Checklist saved for trade #{trade_id}[/yellow]")


@click.command()
@click.option("--days", type=int, default=None, help="Only trades entered in the last N days.")
def rules(days: Optional[int]) -> None:
    """Show how consistently you trade your plan.

    Rule adherence is the share of trades marked as following the plan.
    Checklist pass rates come from 'goldjournal check'.
    """
    store = get_data_store()
    start = date.today() - timedelta(days=days) if days is not None else None
    history = store.get_trades(start=start)
    adherence = rule_adherence(history)

    if adherence.total_trades == 0:
        console.print(Panel(
            "[dim]No trades logged yet[/dim]",
            title="[bold]Rule Adherence[/bold]",
            border_style="dim",
        ))
        return

    color = "green" if adherence.adherence_rate >= 80 else "yellow" if adherence.adherence_rate >= 50 else "red"
    console.print(Panel(
        f"Adherence:      [{color}]{adherence.adherence_rate:.1f}%[/{color}]\n"
        f"Followed Plan:  [green]{adherence.rules_followed}[/green]\n"
        f"Broke Rules:    [red]{adherence.rules_broken}[/red]\n"
        f"Total Trades:   {adherence.total_trades}",
        title="[bold cyan]Rule Adherence[/bold cyan]",
        border_style="cyan",
    ))

    trade_ids = {trade.id for trade in history}
    checks = [c for c in store.get_rule_checks() if c.trade_id in trade_ids]
    if not checks:
        console.print("[dim]No checklists answered yet. Use 'goldjournal check TRADE_ID'.[/dim]")
        return

    table = Table(title="Checklist Pass Rates", show_header=True, header_style="bold cyan")
    table.add_column("Rule", style="bold")
    table.add_column("Passed", justify="right")
    table.add_column("Answered", justify="right")
    table.add_column("Pass Rate", justify="right")
    for bucket in rule_check_breakdown(checks):
        rate_color = "green" if bucket.pass_rate >= 80 else "red"
        table.add_row(
            CHECK_LABELS.get(bucket.item, bucket.item),
            str(bucket.passed),
            str(bucket.answered),
            f"[{rate_color}]{bucket.pass_rate:.1f}%[/{rate_color}]",
        )
    console.print(table)


@click.group()
def missed() -> None:
    """Track setups you saw but did not take.

    \b
    Examples:
      goldjournal missed add --direction long --setup FVG --pnl 400 --reason Hesitation
      goldjournal missed list
      goldjournal missed list --reason Doubt
      goldjournal missed delete 3
    """
    pass


@missed.command("add")
@click.option("--market", default=None, help="Market symbol (default from config, usually GC).")
@click.option("--direction", type=click.Choice(["long", "short"]), required=True, help="Direction of the missed trade.")
@click.option("--setup", "setup_type", default="", help="Setup type (e.g. FVG, OB, BOS).")
@click.option("--entry", "entry_price", type=float, default=None, help="Entry price.")
@click.option("--exit", "exit_price", type=float, default=None, help="Exit price.")
@click.option("--stop", "stop_loss", type=float, default=None, help="Stop loss price.")
@click.option("--target", "take_profit", type=float, default=None, help="Take profit price.")
@click.option("--pnl", "potential_pnl", type=float, default=None, help="P&L the trade would have made.")
@click.option("--r", "r_multiple", type=float, default=None, help="R-multiple the trade would have made.")
@click.option(
    "--entry-time",
    type=click.DateTime(formats=DATETIME_FORMATS),
    default=None,
    help="When the setup triggered (YYYY-MM-DD HH:MM).",
)
@click.option("--reason", type=click.Choice(list(MISSED_REASONS)), default=None, help="Why you did not take it.")
@click.option("--notes", default=None, help="Notes about the setup.")
def add_missed(
    market: Optional[str],
    direction: str,
    setup_type: str,
    entry_price: Optional[float],
    exit_price: Optional[float],
    stop_loss: Optional[float],
    take_profit: Optional[float],
    potential_pnl: Optional[float],
    r_multiple: Optional[float],
    entry_time: Optional[datetime],
    reason: Optional[str],
    notes: Optional[str],
) -> None:
    """Record a missed trade."""
    config = get_config()
    currency = get_currency(config)

    try:
        potential = PotentialTrade(
            market=(market or config["journal"].get("default_market", "GC")).upper(),
            direction=direction,
            setup_type=setup_type,
            entry_price=entry_price,
            exit_price=exit_price,
            stop_loss=stop_loss,
            take_profit=take_profit,
            potential_pnl=potential_pnl,
            r_multiple=r_multiple,
            entry_time=entry_time,
            reason=reason,
            notes=notes,
        )
    except ValidationError as e:
        print_error(f"[red]Invalid missed trade:[/red]\n\n{e}")
        raise SystemExit(1)

    saved = get_data_store(config).add_potential_trade(potential)

    summary = f"[green]✓ Logged missed trade #{saved.id}[/green] {saved.market} {saved.direction}"
    if saved.potential_pnl is not None:
        summary += f" {format_pnl(saved.potential_pnl, currency)}"
    console.print(summary)


@missed.command("list")
@click.option("--setup", "setup_type", default=None, help="Filter by setup type.")
@click.option("--reason", type=click.Choice(list(MISSED_REASONS)), default=None, help="Filter by reason.")
@click.option("--limit", type=click.IntRange(min=1), default=100, show_default=True, help="Maximum trades to show.")
def list_missed(setup_type: Optional[str], reason: Optional[str], limit: int) -> None:
    """Show missed trades and the P&L left on the table."""
    config = get_config()
    currency = get_currency(config)
    store = get_data_store(config)

    history = store.get_potential_trades(setup_type=setup_type, reason=reason, limit=limit)
    if not history:
        console.print("[dim]No missed trades logged[/dim]")
        return

    summary = summarize_missed(history)
    lines = [
        f"Missed Trades:  {summary.count}",
        f"Potential P&L:  {format_pnl(summary.total_potential_pnl, currency)}",
        f"Avg Per Trade:  {format_pnl(summary.avg_potential_pnl, currency)}",
    ]
    if summary.top_reason is not None:
        lines.append(f"Top Reason:     [yellow]{summary.top_reason}[/yellow] ({summary.top_reason_count}x)")
    console.print(Panel(
        "\n".join(lines),
        title="[bold cyan]Missed Opportunities[/bold cyan]",
        border_style="cyan",
    ))

    table = Table(title="Missed Trades", show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Date/Time", style="dim")
    table.add_column("Market", style="bold")
    table.add_column("Side", justify="center")
    table.add_column("Setup")
    table.add_column("Reason")
    table.add_column("R", justify="right")
    table.add_column("P&L", justify="right")

    for potential in history:
        side_color = "green" if potential.direction == "long" else "red"
        when = potential.entry_time or potential.created_at
        table.add_row(
            str(potential.id),
            when.strftime("%Y-%m-%d %H:%M"),
            potential.market,
            f"[{side_color}]{potential.direction}[/{side_color}]",
            potential.setup_type or "-",
            potential.reason or "-",
            f"{potential.r_multiple:.2f}" if potential.r_multiple is not None else "-",
            format_pnl(potential.potential_pnl, currency) if potential.potential_pnl is not None else "-",
        )
    console.print(table)


@missed.command("delete")
@click.argument("trade_id", type=int)
def delete_missed(trade_id: int) -> None:
    """Delete a missed trade."""
    store = get_data_store()

    if not store.delete_potential_trade(trade_id):
        print_error(f"[red]Missed trade #{trade_id} not found[/red]")
        raise SystemExit(1)

    console.print(f"[green]✓ Deleted missed trade #{trade_id}[/green]")
