"""Session commands for GoldJournal CLI.

Pre-market session plans, the end-of-day review and the trading playbook.
"""

import logging
from datetime import date, datetime
from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from goldjournal.analytics.streaks import SESSION_PLANS
from goldjournal.cli.common import console, get_data_store, print_error
from goldjournal.cli.journal import parse_tags
from goldjournal.models import (
    RULE_TYPES,
    KeyLevel,
    LiquidityZone,
    NewsEvent,
    PlaybookEntry,
    SessionPlan,
)

logger = logging.getLogger(__name__)

BIAS_COLORS = {
    "bullish": "green",
    "bearish": "red",
    "neutral": "yellow",
}

RULE_TYPE_STYLES = {
    "trade": ("Trade Rule", "green"),
    "avoid": ("Avoid Rule", "red"),
    "execution": ("Execution", "blue"),
    "insight": ("Insight", "magenta"),
}

EOD_ITEMS = (
    ("eod_journal_done", "Journal entries completed", "All trades reflected on"),
    ("eod_replay_done", "Session replay done", "Reviewed charts and executions"),
    ("eod_playbook_done", "Playbook updated", "New rules or insights added"),
)


def parse_level(value: str) -> KeyLevel:
    """Parse ``label @ price`` with an optional ``@ type`` suffix.

    Raises:
        click.BadParameter: If the price is not a number or the type is unknown.
    """
    parts = [part.strip() for part in value.split("@")]
    if len(parts) not in (2, 3):
        raise click.BadParameter(f"Invalid level '{value}'. Use 'label @ price [@ type]'.")
    try:
        price = float(parts[1])
    except ValueError:
        raise click.BadParameter(f"Invalid price in level '{value}'.")
    level_type = parts[2].lower() if len(parts) == 3 else "poi"
    if level_type not in ("support", "resistance", "poi"):
        raise click.BadParameter(f"Unknown level type '{parts[2]}'. Use support, resistance or poi.")
    return KeyLevel(price=price, label=parts[0], type=level_type)


def parse_zone(value: str) -> LiquidityZone:
    """Parse ``start - end [- label]`` into a liquidity zone.

    Raises:
        click.BadParameter: If either bound is not a number.
    """
    parts = [part.strip() for part in value.split("-", 2)]
    if len(parts) < 2:
        raise click.BadParameter(f"Invalid zone '{value}'. Use 'start - end [- label]'.")
    try:
        start, end = float(parts[0]), float(parts[1])
    except ValueError:
        raise click.BadParameter(f"Invalid prices in zone '{value}'.")
    return LiquidityZone(price_start=start, price_end=end, label=parts[2] if len(parts) == 3 else "")


def parse_news(value: str) -> NewsEvent:
    """Parse ``time | event [| impact [| expected [| actual]]]``.

    Raises:
        click.BadParameter: If the event is missing or the impact is unknown.
    """
    parts = [part.strip() for part in value.split("|")]
    if len(parts) < 2 or not parts[1]:
        raise click.BadParameter(f"Invalid news event '{value}'. Use 'time | event [| impact]'.")
    impact = parts[2].lower() if len(parts) > 2 and parts[2] else "medium"
    if impact not in ("high", "medium", "low"):
        raise click.BadParameter(f"Unknown impact '{parts[2]}'. Use high, medium or low.")
    return NewsEvent(
        time=parts[0],
        event=parts[1],
        impact=impact,
        expected=parts[3] if len(parts) > 3 and parts[3] else None,
        actual=parts[4] if len(parts) > 4 and parts[4] else None,
    )


def _each(parser):
    """Click callback applying ``parser`` to every value of a multiple option."""

    def callback(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]):
        return tuple(parser(value) for value in values)

    return callback


def _show_plan(plan: SessionPlan, trades_taken: int) -> None:
    bias = plan.market_bias or "none"
    bias_color = BIAS_COLORS.get(plan.market_bias or "", "dim")
    count_color = "red" if trades_taken > plan.max_trades else "green"
    lines = [
        f"Bias:        [{bias_color}]{bias}[/{bias_color}]",
        f"Trades:      [{count_color}]{trades_taken} / {plan.max_trades}[/{count_color}]",
    ]
    if plan.notes:
        lines.append(f"Notes:       {plan.notes}")
    console.print(Panel(
        "\n".join(lines),
        title=f"[bold cyan]Session Plan {plan.plan_date.isoformat()}[/bold cyan]",
        border_style="cyan",
    ))

    levels = [("HTF", level) for level in plan.htf_levels] + [("LTF", level) for level in plan.ltf_levels]
    if levels:
        table = Table(title="Key Levels", show_header=True, header_style="bold cyan")
        table.add_column("TF", style="dim")
        table.add_column("Level", style="bold")
        table.add_column("Price", justify="right")
        table.add_column("Type")
        for timeframe, level in levels:
            table.add_row(timeframe, level.label or "-", f"{level.price:,.2f}", level.type)
        console.print(table)

    if plan.liquidity_zones:
        table = Table(title="Liquidity Zones", show_header=True, header_style="bold cyan")
        table.add_column("Zone", style="bold")
        table.add_column("From", justify="right")
        table.add_column("To", justify="right")
        for zone in plan.liquidity_zones:
            table.add_row(zone.label or "-", f"{zone.price_start:,.2f}", f"{zone.price_end:,.2f}")
        console.print(table)

    if plan.news_events:
        table = Table(title="News", show_header=True, header_style="bold cyan")
        table.add_column("Time", style="dim")
        table.add_column("Event", style="bold")
        table.add_column("Impact")
        table.add_column("Expected", justify="right")
        table.add_column("Actual", justify="right")
        for event in plan.news_events:
            impact_color = {"high": "red", "medium": "yellow"}.get(event.impact, "dim")
            table.add_row(
                event.time,
                event.event,
                f"[{impact_color}]{event.impact}[/{impact_color}]",
                event.expected or "-",
                event.actual or "-",
            )
        console.print(table)


@click.command()
@click.option(
    "--date",
    "plan_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Day to plan (YYYY-MM-DD). Defaults to today.",
)
@click.option("--bias", "market_bias", type=click.Choice(["bullish", "bearish", "neutral"]), default=None, help="Directional bias.")
@click.option("--htf", "htf_levels", multiple=True, callback=_each(parse_level), help="Higher timeframe level, 'label @ price [@ type]'. Repeatable.")
@click.option("--ltf", "ltf_levels", multiple=True, callback=_each(parse_level), help="Lower timeframe level, 'label @ price [@ type]'. Repeatable.")
@click.option("--zone", "liquidity_zones", multiple=True, callback=_each(parse_zone), help="Liquidity zone, 'start - end [- label]'. Repeatable.")
@click.option("--news", "news_events", multiple=True, callback=_each(parse_news), help="News event, 'time | event [| impact]'. Repeatable.")
@click.option("--max-trades", type=int, default=None, help="Maximum trades for the day.")
@click.option("--notes", default=None, help="Plan notes.")
def plan(
    plan_date: Optional[datetime],
    market_bias: Optional[str],
    htf_levels: tuple[KeyLevel, ...],
    ltf_levels: tuple[KeyLevel, ...],
    liquidity_zones: tuple[LiquidityZone, ...],
    news_events: tuple[NewsEvent, ...],
    max_trades: Optional[int],
    notes: Optional[str],
) -> None:
    """Create, update or show a session plan.

    With no plan options, shows the plan for the day. Otherwise the given
    fields are written over the day's plan and the rest are kept.

    \b
    Examples:
      goldjournal plan
      goldjournal plan --bias bullish --htf "PDH @ 2351.4 @ resistance" --htf "PDL @ 2332.0"
      goldjournal plan --zone "2338 - 2340.5 - Asia lows" --news "08:30 | CPI | high"
      goldjournal plan --max-trades 2 --notes "Only A+ setups after London"
    """
    day = plan_date.date() if plan_date else date.today()
    store = get_data_store()
    existing = store.get_session_plan(day)

    updates = {
        "market_bias": market_bias,
        "htf_levels": htf_levels or None,
        "ltf_levels": ltf_levels or None,
        "liquidity_zones": liquidity_zones or None,
        "news_events": news_events or None,
        "max_trades": max_trades,
        "notes": notes,
    }
    updates = {field: value for field, value in updates.items() if value is not None}

    if updates:
        base = existing.model_dump() if existing else {"plan_date": day}
        try:
            session_plan = SessionPlan(**{**base, **updates})
        except ValidationError as e:
            print_error(f"[red]Invalid session plan:[/red]\n\n{e}")
            raise SystemExit(1)

        existing = store.save_session_plan(session_plan)
        console.print(f"[green]✓ Saved session plan for {day.isoformat()}[/green]")
        if day == date.today():
            streak = store.record_streak(SESSION_PLANS, day)
            console.print(f"[dim]Planning streak: {streak.current_count} day(s)[/dim]")

    if existing is None:
        console.print(Panel(
            f"[dim]No session plan for {day.isoformat()}[/dim]\n\n"
            "[dim]Use 'goldjournal plan --bias bullish --htf \"PDH @ 2351.4\"' to create one.[/dim]",
            title="[bold]Session Plan[/bold]",
            border_style="dim",
        ))
        return

    trades_taken = len(store.get_trades(start=day, end=day))
    _show_plan(existing, trades_taken)


@click.command()
@click.option(
    "--date",
    "plan_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Day to review (YYYY-MM-DD). Defaults to today.",
)
@click.option("--journal", "journal_done", is_flag=True, default=False, help="Journal entries completed.")
@click.option("--replay", "replay_done", is_flag=True, default=False, help="Session replay done.")
@click.option("--playbook", "playbook_done", is_flag=True, default=False, help="Playbook updated.")
@click.option("--rating", type=click.IntRange(1, 5), default=None, help="Rate the session from 1 to 5.")
def eod(
    plan_date: Optional[datetime],
    journal_done: bool,
    replay_done: bool,
    playbook_done: bool,
    rating: Optional[int],
) -> None:
    """Work through the end-of-day review checklist.

    \b
    Examples:
      goldjournal eod                          # Show today's checklist
      goldjournal eod --journal --replay       # Tick items off
      goldjournal eod --playbook --rating 4
    """
    day = plan_date.date() if plan_date else date.today()
    store = get_data_store()
    session_plan = store.get_session_plan(day)

    if session_plan is None:
        print_error(
            f"[red]No session plan for {day.isoformat()}.[/red]\n\n"
            "Create a session plan first with [cyan]goldjournal plan[/cyan]."
        )
        raise SystemExit(1)

    # Flags only tick items off; unset ones keep their stored value
    if journal_done or replay_done or playbook_done or rating is not None:
        store.update_end_of_day(
            session_plan.id,
            journal_done=journal_done or None,
            replay_done=replay_done or None,
            playbook_done=playbook_done or None,
            session_rating=rating,
        )
        session_plan = store.get_session_plan(day)

    lines = []
    for field, label, description in EOD_ITEMS:
        mark = "[green]✓[/green]" if getattr(session_plan, field) else "[dim]○[/dim]"
        lines.append(f"{mark} {label} [dim]({description})[/dim]")
    if session_plan.eod_session_rating is not None:
        stars = "★" * session_plan.eod_session_rating + "☆" * (5 - session_plan.eod_session_rating)
        lines.append(f"\nSession Rating: [yellow]{stars}[/yellow] {session_plan.eod_session_rating}/5")
    else:
        lines.append("\nSession Rating: [dim]not rated[/dim]")

    border = "green" if session_plan.eod_complete else "cyan"
    console.print(Panel(
        "\n".join(lines),
        title=f"[bold {border}]End of Day Review {day.isoformat()}[/bold {border}]",
        border_style=border,
    ))
    if session_plan.eod_complete:
        console.print("[green]✓ Review complete[/green]")


@click.group()
def playbook() -> None:
    """Keep the rules and insights your trades have taught you.

    \b
    Examples:
      goldjournal playbook add "Only FVGs in killzones" --type trade --setup FVG --evidence 4,9
      goldjournal playbook add "No trades into CPI" --type avoid
      goldjournal playbook list
      goldjournal playbook retire 2
    """
    pass


@playbook.command("add")
@click.argument("title")
@click.option("--type", "rule_type", type=click.Choice(list(RULE_TYPES)), default="trade", show_default=True, help="Kind of entry.")
@click.option("--description", default=None, help="Longer explanation.")
@click.option("--setup", "setup_type", default=None, help="Setup the rule applies to.")
@click.option("--evidence", default=None, help="Comma separated IDs of trades backing the rule.")
def add_entry(
    title: str,
    rule_type: str,
    description: Optional[str],
    setup_type: Optional[str],
    evidence: Optional[str],
) -> None:
    """Add a playbook entry.

    TITLE is the rule in a few words.
    """
    try:
        evidence_ids = tuple(int(trade_id) for trade_id in parse_tags(evidence))
    except ValueError:
        print_error(f"[red]Invalid trade IDs '{evidence}'. Use e.g. 4,9.[/red]")
        raise SystemExit(1)

    try:
        entry = PlaybookEntry(
            rule_type=rule_type,
            title=title.strip(),
            description=description,
            setup_type=setup_type,
            evidence_trade_ids=evidence_ids,
        )
    except ValidationError as e:
        print_error(f"[red]Invalid playbook entry:[/red]\n\n{e}")
        raise SystemExit(1)

    saved = get_data_store().add_playbook_entry(entry)
    label, color = RULE_TYPE_STYLES[saved.rule_type]
    console.print(f"[green]✓ Added playbook entry #{saved.id}[/green] [{color}]{label}[/{color}] {saved.title}")


@playbook.command("list")
@click.option("--all", "show_all", is_flag=True, default=False, help="Include retired entries.")
def list_entries(show_all: bool) -> None:
    """Show the playbook, newest entries first."""
    entries = get_data_store().get_playbook(active_only=not show_all)

    if not entries:
        console.print(Panel(
            "[dim]No playbook entries yet. Use 'goldjournal playbook add TITLE' to start one.[/dim]",
            title="[bold]Playbook[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Playbook", show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Type")
    table.add_column("Title", style="bold")
    table.add_column("Setup")
    table.add_column("Evidence", justify="right")
    if show_all:
        table.add_column("Active", justify="center")

    for entry in entries:
        label, color = RULE_TYPE_STYLES[entry.rule_type]
        row = [
            str(entry.id),
            f"[{color}]{label}[/{color}]",
            entry.title,
            entry.setup_type or "-",
            str(len(entry.evidence_trade_ids)),
        ]
        if show_all:
            row.append("[green]●[/green]" if entry.is_active else "[dim]○[/dim]")
        table.add_row(*row)

    console.print(table)


@playbook.command("retire")
@click.argument("entry_id", type=int)
def retire_entry(entry_id: int) -> None:
    """Retire a playbook entry that no longer applies."""
    store = get_data_store()

    if not store.set_playbook_entry_active(entry_id, False):
        print_error(f"[red]Playbook entry #{entry_id} not found[/red]")
        raise SystemExit(1)

    console.print(f"[green]✓ Retired playbook entry #{entry_id}[/green]")
