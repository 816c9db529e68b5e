"""Configuration commands for GoldJournal CLI."""

import click

from goldjournal.cli.common import console
from goldjournal.config import create_template_config, get_config_path


@click.command()
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing config file.")
def init(force: bool) -> None:
    """Create a config file with default settings."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print(f"[yellow]Config already exists at {config_path}[/yellow]")
        console.print("[dim]Use --force to overwrite it.[/dim]")
        return

    path = create_template_config(config_path)
    console.print(f"[green]✓ Wrote config to {path}[/green]")
