"""Analytics commands for GoldJournal CLI.

Dashboard metrics, edge breakdowns and the monthly trade calendar.
"""

from datetime import date, timedelta
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from goldjournal.analytics import (
    by_execution_grade,
    by_r_multiple,
    by_setup_type,
    by_weekday,
    compute_stats,
    cumulative_pnl,
    month_grid,
    rule_adherence,
)
from goldjournal.cli.common import (
    console,
    format_pnl,
    get_config,
    get_currency,
    get_data_store,
    print_error,
)

GRADE_COLORS = {
    "A": "green",
    "B": "blue",
    "C": "yellow",
    "F": "red",
}

CALENDAR_HEADERS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def _load_trades(days: Optional[int]):
    config = get_config()
    store = get_data_store(config)
    start = date.today() - timedelta(days=days) if days is not None else None
    return config, store.get_trades(start=start)


def parse_month(value: Optional[str]) -> tuple[int, int]:
    """Parse ``YYYY-MM`` into (year, month); None means the current month.

    Raises:
        click.BadParameter: If the value is not a valid month.
    """
    if value is None:
        today = date.today()
        return today.year, today.month
    try:
        year_str, month_str = value.split("-")
        year, month = int(year_str), int(month_str)
    except ValueError:
        raise click.BadParameter(f"Invalid month '{value}'. Use YYYY-MM.")
    if not 1 <= year <= 9999 or not 1 <= month <= 12:
        raise click.BadParameter(f"Invalid month '{value}'. Use YYYY-MM.")
    return year, month


@click.command()
@click.option("--days", type=int, default=None, help="Only trades entered in the last N days.")
def stats(days: Optional[int]) -> None:
    """Display dashboard performance metrics.
    
    Shows win rate, average R, total P&L, profit factor, average
    win/loss, rule adherence and the best and worst trading days.
    
    \b
    Examples:
      goldjournal stats            # All trades
      goldjournal stats --days 30  # Last 30 days
    """
    config, history = _load_trades(days)
    currency = get_currency(config)
    result = compute_stats(history)
    adherence = rule_adherence(history)

    if result.total_trades == 0:
        console.print(Panel(
            "[dim]No trades logged yet[/dim]",
            title="[bold]Dashboard[/bold]",
            border_style="dim",
        ))
        return

    win_color = "green" if result.win_rate >= 50 else "red"
    lines = [
        f"Total Trades:   {result.total_trades}",
        f"Win Rate:       [{win_color}]{result.win_rate:.1f}%[/{win_color}]",
        f"Avg R:R:        {result.avg_rr:.2f}R",
        f"Total P&L:      {format_pnl(result.total_pnl, currency)}",
        f"Profit Factor:  {result.profit_factor:.2f}",
        f"Avg Win:        [green]{currency}{result.avg_win:,.2f}[/green]",
        f"Avg Loss:       [red]{currency}{result.avg_loss:,.2f}[/red]",
        f"Rules Followed: {adherence.adherence_rate:.1f}%",
    ]
    if result.best_day is not None:
        lines.append(f"Best Day:       {result.best_day.date.isoformat()} {format_pnl(result.best_day.pnl, currency)}")
    if result.worst_day is not None:
        lines.append(f"Worst Day:      {result.worst_day.date.isoformat()} {format_pnl(result.worst_day.pnl, currency)}")

    console.print(Panel(
        "\n".join(lines),
        title="[bold cyan]Dashboard[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.option("--days", type=int, default=None, help="Only trades entered in the last N days.")
@click.option("--points", type=click.IntRange(min=1), default=10, show_default=True, help="P&L curve points to show.")
def edge(days: Optional[int], points: int) -> None:
    """Break down where your edge comes from.
    
    Win/loss by setup type, win rate by weekday, execution grade
    distribution, R-multiple distribution and the cumulative P&L curve.
    """
    config, history = _load_trades(days)
    currency = get_currency(config)

    if not history:
        console.print(Panel(
            "[dim]No trade data yet[/dim]\n\n"
            "[dim]Log trades to see your edge analytics.[/dim]",
            title="[bold]Edge Analytics[/bold]",
            border_style="dim",
        ))
        return

    setup_table = Table(title="Win/Loss by Setup Type", header_style="bold cyan")
    setup_table.add_column("Setup", style="bold")
    setup_table.add_column("Wins", justify="right", style="green")
    setup_table.add_column("Losses", justify="right", style="red")
    for bucket in by_setup_type(history):
        setup_table.add_row(bucket.setup, str(bucket.wins), str(bucket.losses))
    console.print(setup_table)

    weekday_table = Table(title="Win Rate by Day of Week", header_style="bold cyan")
    weekday_table.add_column("Day", style="bold")
    weekday_table.add_column("Win Rate", justify="right")
    weekday_table.add_column("Trades", justify="right")
    for bucket in by_weekday(history):
        color = "green" if bucket.win_rate >= 50 else "red"
        weekday_table.add_row(bucket.day, f"[{color}]{bucket.win_rate:.1f}%[/{color}]", str(bucket.total))
    console.print(weekday_table)

    grades = by_execution_grade(history)
    if grades:
        grade_table = Table(title="Execution Grade Distribution", header_style="bold cyan")
        grade_table.add_column("Grade", justify="center")
        grade_table.add_column("Trades", justify="right")
        for bucket in grades:
            color = GRADE_COLORS.get(bucket.grade, "white")
            grade_table.add_row(f"[{color}]{bucket.grade}[/{color}]", str(bucket.count))
        console.print(grade_table)
    else:
        console.print("[dim]No graded trades yet[/dim]")

    r_table = Table(title="R:R Distribution", header_style="bold cyan")
    r_table.add_column("Range")
    r_table.add_column("Trades", justify="right")
    for bucket in by_r_multiple(history):
        color = "green" if bucket.tone == "win" else "red"
        r_table.add_row(f"[{color}]{bucket.label}[/{color}]", str(bucket.count))
    console.print(r_table)

    curve = cumulative_pnl(history)
    if curve.points:
        curve_table = Table(title="Cumulative P&L", header_style="bold cyan")
        curve_table.add_column("Date", style="dim")
        curve_table.add_column("P&L", justify="right")
        for point in curve.points[-points:]:
            curve_table.add_row(point.date, format_pnl(point.pnl, currency))
        console.print(curve_table)
    console.print(f"[bold]Current Total:[/bold] {format_pnl(curve.final_pnl, currency)}")


@click.command()
@click.option("--month", "month_str", default=None, help="Month to show (YYYY-MM). Defaults to this month.")
def calendar(month_str: Optional[str]) -> None:
    """Show a monthly calendar of trades and daily P&L.
    
    \b
    Examples:
      goldjournal calendar
      goldjournal calendar --month 2024-06
    """
    try:
        year, month = parse_month(month_str)
    except click.BadParameter as e:
        print_error(f"[red]{e.message}[/red]")
        raise SystemExit(1)

    config = get_config()
    currency = get_currency(config)
    store = get_data_store(config)
    grid = month_grid(store.get_trades(), year, month)

    table = Table(
        title=f"{date(year, month, 1):%B %Y}",
        show_header=True,
        header_style="bold cyan",
        show_lines=True,
    )
    for header in CALENDAR_HEADERS:
        table.add_column(header, justify="center")

    for week in grid.weeks:
        cells = []
        for day in week:
            if not day.in_month:
                cells.append(f"[dim]{day.date.day}[/dim]")
            elif day.trade_count:
                cells.append(f"[bold]{day.date.day}[/bold]\n{format_pnl(day.pnl, currency)}\n[dim]{day.trade_count} trade(s)[/dim]")
            else:
                cells.append(str(day.date.day))
        table.add_row(*cells)

    console.print(table)
    console.print(
        f"[bold]{grid.summary.count} trades[/bold] | {format_pnl(grid.summary.pnl, currency)} P&L"
    )
