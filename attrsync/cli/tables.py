# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Reusable Rich table presets."""

from dataclasses import dataclass
from typing import List

from rich import box
from rich.table import Table

from attrsync.classes import OutcomeStatus, ProcessingOutcome, RepositoryDescriptor, RunSummary


@dataclass(frozen=True)
class TableTheme:
    box_style: box.Box
    header_style: str
    border_style: str
    show_lines: bool
    pad_edge: bool


TABLE_THEMES = {
    # Full wrapped grid
    'square': TableTheme(
        box_style=box.SQUARE,
        header_style='bold magenta',
        border_style='grey35',
        show_lines=True,
        pad_edge=True,
    ),
    # Minimal separators with a heavier header rule
    'minimal': TableTheme(
        box_style=box.MINIMAL_HEAVY_HEAD,
        header_style='bold white',
        border_style='grey50',
        show_lines=False,
        pad_edge=False,
    ),
}

DEFAULT_TABLE_THEME = 'minimal'

STATUS_COLORS = {
    OutcomeStatus.SUCCESS: 'green',
    OutcomeStatus.SKIPPED: 'yellow',
    OutcomeStatus.ERROR: 'red',
}


def build_table(theme: str = DEFAULT_TABLE_THEME, **kwargs) -> Table:
    """Create a Rich table using a named visual theme."""
    preset = TABLE_THEMES.get(theme, TABLE_THEMES[DEFAULT_TABLE_THEME])
    params = {
        'box': preset.box_style,
        'header_style': preset.header_style,
        'border_style': preset.border_style,
        'show_lines': preset.show_lines,
        'pad_edge': preset.pad_edge,
    }
    params.update(kwargs)
    return Table(**params)


def colorize_status(status: OutcomeStatus) -> str:
    """Wrap status text with the appropriate Rich color tag."""
    color = STATUS_COLORS.get(status, 'white')
    return f'[{color}]{status.value}[/{color}]'


def build_repository_table(repositories: List[RepositoryDescriptor]) -> Table:
    """Build a table of listed repositories, in processing order."""
    table = build_table(title=f'{len(repositories)} repositories')
    table.add_column('#', justify='right', style='dim')
    table.add_column('Repository', style='cyan')
    table.add_column('Visibility')
    table.add_column('Fork')
    table.add_column('Last push', style='dim')

    for index, repo in enumerate(repositories, start=1):
        pushed = repo.pushed_at.strftime('%Y-%m-%d %H:%M') if repo.pushed_at else '-'
        table.add_row(str(index), repo.full_name, repo.visibility, 'yes' if repo.is_fork else 'no', pushed)
    return table


def build_tally_table(summary: RunSummary) -> Table:
    """Counts per status, every status shown."""
    table = build_table(title='Summary')
    table.add_column('Status')
    table.add_column('Count', justify='right')

    for status, count in summary.tally().items():
        table.add_row(colorize_status(status), str(count))
    table.add_row('[bold]Total[/bold]', f'[bold]{summary.total}[/bold]')
    return table


def build_failures_table(outcomes: List[ProcessingOutcome]) -> Table:
    """Detail listing for every non-Success repository."""
    table = build_table('square', title='Not applied')
    table.add_column('Repository', style='cyan')
    table.add_column('Status')
    table.add_column('Message')

    for outcome in outcomes:
        table.add_row(outcome.repository_name, colorize_status(outcome.status), outcome.message)
    return table
