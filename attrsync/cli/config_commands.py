# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
CLI commands for managing saved attrsync defaults.

Users can configure:
- Account whose repositories are processed
- Template file path
- Working directory for temporary clones
- Listing source (gh or api)
"""

import json
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from attrsync.cli.tables import build_table
from attrsync.constants import LISTING_SOURCES

# Config file location
ATTRSYNC_DIR = Path.home() / '.attrsync'
CONFIG_FILE = ATTRSYNC_DIR / 'config.json'

CONFIG_KEYS = ['account', 'template', 'workdir', 'source']

console = Console()


def load_config() -> dict:
    """Load saved configuration from file."""
    if not CONFIG_FILE.exists():
        return {}
    try:
        with open(CONFIG_FILE, 'r') as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(config: dict) -> bool:
    """Save configuration to file."""
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    try:
        with open(CONFIG_FILE, 'w') as f:
            json.dump(config, f, indent=2)
        return True
    except IOError as e:
        console.print(f'[red]Failed to save config: {e}[/red]')
        return False


def get_config_value(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get a config value with optional default."""
    return load_config().get(key, default)


@click.group(invoke_without_command=True)
@click.pass_context
def config(ctx):
    """Manage saved defaults.

    Saved values are used when neither a CLI option nor an
    ATTRSYNC_* environment variable is given.

    \b
    Examples:
        attrsync config                           # Show current config
        attrsync config set --account octocat     # Set default account
        attrsync config clear --force             # Remove all saved values
    """
    if ctx.invoked_subcommand is None:
        show_config()


def show_config():
    """Display current configuration."""
    config = load_config()

    if not config:
        console.print('\n[yellow]No configuration set.[/yellow]')
        console.print('[dim]Use "attrsync config set --account <login>" to set values.[/dim]')
        console.print(f'\n[dim]Available keys: {", ".join(CONFIG_KEYS)}[/dim]')
        return

    console.print('\n[bold cyan]attrsync Configuration[/bold cyan]\n')

    table = build_table(show_header=True)
    table.add_column('Setting', style='cyan')
    table.add_column('Value', style='green')

    for key, value in sorted(config.items()):
        table.add_row(key, str(value))

    console.print(table)
    console.print(f'\n[dim]Config file: {CONFIG_FILE}[/dim]')


@config.command('set')
@click.option('--account', help='Default account login')
@click.option('--template', help='Default template file path')
@click.option('--workdir', help='Default working directory for clones')
@click.option('--source', type=click.Choice(LISTING_SOURCES), help='Default listing source')
def config_set(account: Optional[str], template: Optional[str], workdir: Optional[str], source: Optional[str]):
    """Set one or more config values.

    \b
    Examples:
        attrsync config set --account octocat
        attrsync config set --template ./templates/.gitattributes --workdir /tmp/clones
    """
    config = load_config()
    changed = []
    for key, value in (('account', account), ('template', template), ('workdir', workdir), ('source', source)):
        if value:
            config[key] = value
            changed.append(f'{key}={value}')

    if changed and save_config(config):
        console.print(f'[green]Config updated: {", ".join(changed)}[/green]')
    elif not changed:
        console.print('[yellow]No options provided. Use --account, --template, --workdir or --source[/yellow]')


@config.command('clear')
@click.option('--force', '-f', is_flag=True, help='Skip confirmation')
def config_clear(force: bool):
    """Clear all configuration.

    \b
    Example:
        attrsync config clear
        attrsync config clear --force
    """
    if not CONFIG_FILE.exists():
        console.print('[yellow]No configuration to clear.[/yellow]')
        return

    if not force and not click.confirm('Clear all configuration?', default=False):
        console.print('[yellow]Cancelled.[/yellow]')
        return

    try:
        CONFIG_FILE.unlink()
        console.print('[green]Configuration cleared.[/green]')
    except IOError as e:
        console.print(f'[red]Failed to clear config: {e}[/red]')


def register_config_commands(cli):
    """Register config commands with a parent CLI group."""
    cli.add_command(config)
