# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Shared helper functions for CLI commands
"""

import os
from typing import Optional

import click
from rich.console import Console

from attrsync.cli import config_commands
from attrsync.constants import ENV_GITHUB_TOKEN, SOURCE_API
from attrsync.hosting.errors import ServiceUnavailable
from attrsync.hosting.gh_cli import GitHubCli
from attrsync.hosting.github_api import GitHubApiClient
from attrsync.prerequisites import PrerequisiteError

console = Console()


def print_success(message: str) -> None:
    """Print a standardized success message."""
    console.print(f'\n  [green]✓[/green] {message}\n')


def print_error(message: str) -> None:
    """Print a standardized error message."""
    console.print(f'\n  [red]✗[/red] {message}\n')


def resolve_setting(cli_value: Optional[str], env_name: str, config_key: str, default: Optional[str] = None):
    """Pick a setting by precedence: CLI option, environment, saved config, default."""
    if cli_value not in (None, ''):
        return cli_value
    env_value = os.environ.get(env_name)
    if env_value:
        return env_value
    saved = config_commands.get_config_value(config_key)
    if saved:
        return saved
    return default


def get_github_token() -> Optional[str]:
    return os.environ.get(ENV_GITHUB_TOKEN) or None


def build_listing_client(source: str, gh: GitHubCli, token: Optional[str]):
    """Client used to list repositories for the chosen source."""
    if source == SOURCE_API:
        return GitHubApiClient(token)
    return gh


def resolve_account(account: Optional[str], client) -> str:
    """Fall back to the authenticated login when no account was configured.

    Raises:
        PrerequisiteError: If no account is configured and the login cannot be determined
    """
    if account:
        return account
    try:
        login = client.get_current_user()
    except ServiceUnavailable as e:
        raise PrerequisiteError(f'Could not determine the authenticated account: {e}') from e
    if not login:
        raise PrerequisiteError('No account given and the authenticated account could not be determined. Use --account.')
    return login


def fail(message: str) -> None:
    """Abort the command with exit code 1."""
    raise click.ClickException(message)
