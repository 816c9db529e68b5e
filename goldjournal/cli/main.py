"""Main CLI entry point for GoldJournal.

This module provides the main click group and lazy loading
of command modules to keep startup fast.
"""

import logging

import click
from rich.console import Console

# Console for rich output
console = Console()


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.
    
    Command modules are only imported when they are actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.
        
        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]
        
        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)
        
        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib
        
        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)
        
        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break
        
        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")
        
        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    "init": "goldjournal.cli.settings",
    # Journal
    "log": "goldjournal.cli.journal",
    "trades": "goldjournal.cli.journal",
    "delete": "goldjournal.cli.journal",
    "streaks": "goldjournal.cli.journal",
    # Analytics
    "stats": "goldjournal.cli.report",
    "edge": "goldjournal.cli.report",
    "calendar": "goldjournal.cli.report",
    # Review
    "reflect": "goldjournal.cli.review",
    "reflections": "goldjournal.cli.review",
    "check": "goldjournal.cli.review",
    "rules": "goldjournal.cli.review",
    "missed": "goldjournal.cli.review",
    # Planning
    "calc": "goldjournal.cli.calc",
    "plan": "goldjournal.cli.session",
    "eod": "goldjournal.cli.session",
    "playbook": "goldjournal.cli.session",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="goldjournal")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """GoldJournal - trading journal and edge analytics for gold futures.
    
    Log your GC/MGC trades, then review win rate, profit factor,
    setup performance and your P&L curve.
    
    \b
    Quick Start:
      goldjournal init                                   # Write a config file
      goldjournal log --direction long --outcome win --pnl 250
      goldjournal stats                                  # Dashboard metrics
      goldjournal edge                                   # Edge breakdown
      goldjournal plan --bias bullish                    # Plan the session
      goldjournal eod --journal --rating 4               # End-of-day review
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
