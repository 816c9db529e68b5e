"""Helpers shared by the CLI command modules."""

import logging
from typing import Any, Optional

from rich.console import Console
from rich.panel import Panel

from goldjournal.config import ConfigError, get_db_path, load_config

logger = logging.getLogger(__name__)

console = Console()


def print_error(message: str, title: str = "Error") -> None:
    """Show an error panel."""
    console.print(Panel(
        message,
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def get_config() -> dict[str, Any]:
    """Load configuration or exit with an error panel."""
    try:
        return load_config()
    except ConfigError as e:
        print_error(f"[red]{e}[/red]", title="Configuration Error")
        raise SystemExit(1)


def get_data_store(config: Optional[dict[str, Any]] = None):
    """Get the journal store configured for this user."""
    from goldjournal.db.store import JournalStore

    config = config if config is not None else get_config()
    db_path = get_db_path(config)
    logger.debug("Using database %s", db_path)
    return JournalStore(db_path)


def get_currency(config: dict[str, Any]) -> str:
    """Currency symbol used for display."""
    return config.get("display", {}).get("currency", "$")


def format_pnl(value: float, currency: str = "$") -> str:
    """Signed, coloured P&L string in rich markup."""
    color = "green" if value >= 0 else "red"
    sign = "+" if value >= 0 else "-"
    return f"[{color}]{sign}{currency}{abs(value):,.2f}[/{color}]"
