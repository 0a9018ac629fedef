# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
attrsync CLI - Main entry point

Usage:
    attrsync apply           - Apply the template to every repository
    attrsync list            - Show repositories a run would process (alias: ls)
    attrsync config          - Show/set saved defaults
"""

from typing import Optional

import click
from dotenv import load_dotenv

from attrsync import __version__
from attrsync.applier import TemplateApplier
from attrsync.classes import OutcomeStatus, RunConfig
from attrsync.cli.config_commands import register_config_commands
from attrsync.cli.helpers import (
    build_listing_client,
    console,
    fail,
    get_github_token,
    print_error,
    print_success,
    resolve_account,
    resolve_setting,
)
from attrsync.cli.tables import build_failures_table, build_repository_table, build_tally_table, colorize_status
from attrsync.constants import (
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_DELAY_SECONDS,
    DEFAULT_MARKER_NAME,
    DEFAULT_REPO_LIMIT,
    DEFAULT_SOURCE,
    DEFAULT_TEMPLATE_PATH,
    DEFAULT_WORKDIR,
    ENV_ACCOUNT,
    ENV_SOURCE,
    ENV_TEMPLATE,
    ENV_WORKDIR,
    LISTING_SOURCES,
)
from attrsync.hosting.errors import ServiceUnavailable
from attrsync.hosting.gh_cli import GitHubCli
from attrsync.hosting.lister import list_repositories
from attrsync.orchestrator import RunOrchestrator
from attrsync.prerequisites import PrerequisiteError, check_prerequisites
from attrsync.utils.logging import setup_logging


class AliasGroup(click.Group):
    """Click Group that supports command aliases without duplicate help entries."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._aliases = {}  # alias -> canonical name

    def add_alias(self, name, alias):
        """Register an alias for an existing command."""
        self._aliases[alias] = name

    def get_command(self, ctx, cmd_name):
        canonical = self._aliases.get(cmd_name, cmd_name)
        return super().get_command(ctx, canonical)

    def format_commands(self, ctx, formatter):
        """Write the help text, appending aliases to command descriptions."""
        alias_map = {}
        for alias, canonical in self._aliases.items():
            alias_map.setdefault(canonical, []).append(alias)

        commands = []
        for subcommand in self.list_commands(ctx):
            cmd = self.commands.get(subcommand)
            if cmd is None or cmd.hidden:
                continue
            help_text = cmd.get_short_help_str(limit=150)
            aliases = alias_map.get(subcommand)
            if aliases:
                subcommand = f'{subcommand}, {", ".join(sorted(aliases))}'
            commands.append((subcommand, help_text))

        if commands:
            with formatter.section('Commands'):
                formatter.write_dl(commands)


def listing_options(func):
    """Options shared by every command that lists repositories."""
    options = [
        click.option('--account', '-a', default=None, help=f'Account login (env: {ENV_ACCOUNT}; default: gh login)'),
        click.option('--include-private', is_flag=True, help='Also process private repositories'),
        click.option('--include-forks', is_flag=True, help='Also process forks'),
        click.option(
            '--limit', type=click.IntRange(min=1), default=DEFAULT_REPO_LIMIT, show_default=True,
            help='Maximum number of repositories to list',
        ),
        click.option(
            '--source', type=click.Choice(LISTING_SOURCES), default=None,
            help=f'Listing source (env: {ENV_SOURCE}; default: {DEFAULT_SOURCE})',
        ),
        click.option(
            '--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']), default='WARNING',
            show_default=True, help='Logging level',
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _list_for_command(
    gh: GitHubCli,
    account: Optional[str],
    source: str,
    limit: int,
    include_private: bool,
    include_forks: bool,
    template_path: Optional[str] = None,
):
    """Shared prerequisite check and listing. Fatal problems abort with exit code 1."""
    token = get_github_token()
    try:
        check_prerequisites(gh, template_path=template_path, source=source, token=token)
        client = build_listing_client(source, gh, token)
        account = resolve_account(account, client)
        with console.status(f'Listing repositories for {account}...'):
            repositories = list_repositories(
                client, account, limit, include_private=include_private, include_forks=include_forks
            )
    except (PrerequisiteError, ServiceUnavailable) as e:
        fail(str(e))

    if not repositories:
        fail(f'No repositories found for {account} with the current filters.')
    return account, repositories


@click.group(cls=AliasGroup)
@click.version_option(version=__version__, prog_name='attrsync')
def cli():
    """attrsync - Roll a .gitattributes template out to an account's repositories"""
    load_dotenv()


@cli.command('apply')
@listing_options
@click.option('--template', '-t', default=None, help=f'Template file (env: {ENV_TEMPLATE}; default: {DEFAULT_TEMPLATE_PATH})')
@click.option('--workdir', '-w', default=None, help=f'Directory for temporary clones (env: {ENV_WORKDIR}; default: {DEFAULT_WORKDIR})')
@click.option('--marker', default=DEFAULT_MARKER_NAME, show_default=True, help='File name the template is written to')
@click.option('--message', '-m', default=DEFAULT_COMMIT_MESSAGE, show_default=True, help='Commit message')
@click.option('--delay', type=click.FloatRange(min=0), default=DEFAULT_DELAY_SECONDS, show_default=True, help='Seconds to pause between repositories')
@click.option('--dry-run', is_flag=True, help='Show what would be done without cloning, committing or pushing')
def apply_command(
    account: Optional[str],
    include_private: bool,
    include_forks: bool,
    limit: int,
    source: Optional[str],
    log_level: str,
    template: Optional[str],
    workdir: Optional[str],
    marker: str,
    message: str,
    delay: float,
    dry_run: bool,
):
    """Apply the template to every repository of an account.

    Repositories are processed one at a time, most recently pushed first.
    Repositories that already contain the marker file are skipped. Individual
    failures are reported in the summary and do not stop the run.

    \b
    Examples:
        attrsync apply --dry-run
        attrsync apply --account octocat --include-private
        attrsync apply -t ./templates/.gitattributes -w /tmp/clones
    """
    setup_logging(log_level)

    config = RunConfig(
        account=resolve_setting(account, ENV_ACCOUNT, 'account'),
        template_path=resolve_setting(template, ENV_TEMPLATE, 'template', DEFAULT_TEMPLATE_PATH),
        workdir=resolve_setting(workdir, ENV_WORKDIR, 'workdir', DEFAULT_WORKDIR),
        marker_name=marker,
        commit_message=message,
        dry_run=dry_run,
        include_private=include_private,
        include_forks=include_forks,
        limit=limit,
        delay=delay,
        source=resolve_setting(source, ENV_SOURCE, 'source', DEFAULT_SOURCE),
    )

    gh = GitHubCli()
    config.account, repositories = _list_for_command(
        gh,
        config.account,
        config.source,
        config.limit,
        config.include_private,
        config.include_forks,
        template_path=config.template_path,
    )

    try:
        applier = TemplateApplier(
            gh,
            config.template_path,
            config.workdir,
            marker_name=config.marker_name,
            commit_message=config.commit_message,
            dry_run=config.dry_run,
        )
    except PrerequisiteError as e:
        fail(str(e))

    mode = '[yellow]DRY RUN[/yellow] ' if config.dry_run else ''
    console.print(
        f'\n{mode}[bold]Applying[/bold] {config.template_path} to '
        f'[cyan]{len(repositories)}[/cyan] repositories of [cyan]{config.account}[/cyan]\n'
    )

    orchestrator = RunOrchestrator(applier, delay=config.delay)

    progress = {}

    def on_repository_started(index, total, repo):
        progress.update(label=f'[dim][{index}/{total}][/dim] {repo.full_name}')

    def on_repository_finished(outcome):
        # Whole line at once, after any log output for this repository
        console.print(f'{progress["label"]} {colorize_status(outcome.status)} [dim]{outcome.message}[/dim]')

    orchestrator.on_repository_started = on_repository_started
    orchestrator.on_repository_finished = on_repository_finished

    summary = orchestrator.run(repositories)

    console.print()
    console.print(build_tally_table(summary))
    failures = summary.failures()
    if failures:
        console.print()
        console.print(build_failures_table(failures))

    tally = summary.tally()
    if tally[OutcomeStatus.ERROR]:
        print_error(f'{tally[OutcomeStatus.ERROR]} repositories failed. See the table above.')
    else:
        print_success(f'Done: {tally[OutcomeStatus.SUCCESS]} applied, {tally[OutcomeStatus.SKIPPED]} skipped.')


@cli.command('list')
@listing_options
def list_command(
    account: Optional[str],
    include_private: bool,
    include_forks: bool,
    limit: int,
    source: Optional[str],
    log_level: str,
):
    """List the repositories a run would process, in processing order.

    \b
    Examples:
        attrsync list
        attrsync ls --account octocat --include-forks
    """
    setup_logging(log_level)

    account = resolve_setting(account, ENV_ACCOUNT, 'account')
    source = resolve_setting(source, ENV_SOURCE, 'source', DEFAULT_SOURCE)
    _, repositories = _list_for_command(GitHubCli(), account, source, limit, include_private, include_forks)
    console.print(build_repository_table(repositories))


cli.add_alias('list', 'ls')

register_config_commands(cli)


def main():
    """Main entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
