# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Pytest fixtures shared by all attrsync tests.

Provides in-memory stand-ins for the gh client and git working copies so
the applier, orchestrator and CLI can be exercised without network access
or real repositories.

Usage:
    def test_something(repo_factory, fake_gh, git_factory, template_file):
        repo = repo_factory(name='alpha')
        ...
"""

import os
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Set

import pytest

from attrsync.classes import CommandResult, RepositoryDescriptor
from attrsync.hosting.errors import ServiceUnavailable

TEMPLATE_CONTENT = '* text=auto\n*.md linguist-documentation\n'
BASE_TIME = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)

# ============================================================================
# Repository Fixtures
# ============================================================================


@pytest.fixture
def repo_factory() -> Callable[..., RepositoryDescriptor]:
    """Factory for RepositoryDescriptor with sensible defaults."""

    def _create(
        name: str = 'project',
        owner: str = 'octocat',
        is_private: bool = False,
        is_fork: bool = False,
        pushed_days_ago: Optional[int] = 0,
    ) -> RepositoryDescriptor:
        pushed_at = None if pushed_days_ago is None else BASE_TIME - timedelta(days=pushed_days_ago)
        return RepositoryDescriptor(
            owner=owner,
            name=name,
            is_private=is_private,
            is_fork=is_fork,
            pushed_at=pushed_at,
        )

    return _create


@pytest.fixture
def three_repos(repo_factory) -> List[RepositoryDescriptor]:
    """Three public, non-fork repositories, most recent first."""
    return [
        repo_factory(name='alpha', pushed_days_ago=1),
        repo_factory(name='beta', pushed_days_ago=2),
        repo_factory(name='gamma', pushed_days_ago=3),
    ]


@pytest.fixture
def template_file(tmp_path) -> str:
    path = tmp_path / 'template.gitattributes'
    path.write_text(TEMPLATE_CONTENT)
    return str(path)


@pytest.fixture
def workdir(tmp_path) -> str:
    return str(tmp_path / 'temp-repos')


# ============================================================================
# Fake gh client
# ============================================================================


@dataclass
class FakeGitHubCli:
    """Records clones and serves a preset listing."""

    repositories: List[RepositoryDescriptor] = field(default_factory=list)
    installed: bool = True
    authenticated: bool = True
    login: Optional[str] = 'octocat'
    listing_error: Optional[str] = None
    clone_failures: Set[str] = field(default_factory=set)
    existing_files: Dict[str, Dict[str, str]] = field(default_factory=dict)
    cloned: List[str] = field(default_factory=list)
    destinations: Dict[str, str] = field(default_factory=dict)
    listed: List[tuple] = field(default_factory=list)

    def is_installed(self) -> bool:
        return self.installed

    def is_authenticated(self) -> bool:
        return self.authenticated

    def get_current_user(self) -> Optional[str]:
        return self.login

    def list_repositories(self, account: str, limit: int) -> List[RepositoryDescriptor]:
        self.listed.append((account, limit))
        if self.listing_error:
            raise ServiceUnavailable(self.listing_error)
        return list(self.repositories)[:limit]

    def clone_repository(self, owner: str, name: str, destination: str) -> CommandResult:
        self.cloned.append(f'{owner}/{name}')
        self.destinations[name] = destination
        if name in self.clone_failures:
            return CommandResult(ok=False, stderr=f'repository {owner}/{name} not found')
        os.makedirs(destination)
        for filename, content in self.existing_files.get(name, {}).items():
            with open(os.path.join(destination, filename), 'w') as f:
                f.write(content)
        return CommandResult(ok=True)


@pytest.fixture
def fake_gh() -> FakeGitHubCli:
    return FakeGitHubCli()


# ============================================================================
# Fake git working copies
# ============================================================================


@dataclass
class FakeGitWorkingCopy:
    path: str
    status_output: str = '?? .gitattributes'
    status_ok: bool = True
    stage_ok: bool = True
    commit_ok: bool = True
    push_ok: bool = True
    calls: List[str] = field(default_factory=list)

    def status(self) -> CommandResult:
        self.calls.append('status')
        return CommandResult(ok=self.status_ok, stdout=self.status_output if self.status_ok else '')

    def stage(self, files: List[str]) -> CommandResult:
        self.calls.append('stage')
        return CommandResult(ok=self.stage_ok)

    def commit(self, message: str) -> CommandResult:
        self.calls.append('commit')
        return CommandResult(ok=self.commit_ok)

    def push(self) -> CommandResult:
        self.calls.append('push')
        return CommandResult(ok=self.push_ok)


class FakeGitFactory:
    """Creates FakeGitWorkingCopy instances, configurable per repository name."""

    def __init__(self):
        self.overrides: Dict[str, dict] = {}
        self.created: Dict[str, FakeGitWorkingCopy] = {}

    def configure(self, name: str, **kwargs) -> None:
        self.overrides[name] = kwargs

    def __call__(self, path: str) -> FakeGitWorkingCopy:
        name = os.path.basename(os.path.normpath(path))
        git = FakeGitWorkingCopy(path=path, **self.overrides.get(name, {}))
        self.created[name] = git
        return git

    def calls_for(self, name: str) -> List[str]:
        git = self.created.get(name)
        return git.calls if git else []

    @property
    def any_mutation(self) -> bool:
        return any(
            call in ('stage', 'commit', 'push') for git in self.created.values() for call in git.calls
        )


@pytest.fixture
def git_factory() -> FakeGitFactory:
    return FakeGitFactory()


# ============================================================================
# Command runner stub
# ============================================================================


class RecordingRunner:
    """Stands in for run_command; returns queued results and records commands."""

    def __init__(self, results: Optional[List[CommandResult]] = None, default: Optional[CommandResult] = None):
        self.results = list(results or [])
        self.default = default or CommandResult(ok=True)
        self.commands: List[List[str]] = []
        self.cwds: List[Optional[str]] = []

    def __call__(self, cmd: List[str], cwd: Optional[str] = None) -> CommandResult:
        self.commands.append(cmd)
        self.cwds.append(cwd)
        if self.results:
            return self.results.pop(0)
        return self.default


@pytest.fixture
def runner_factory() -> Callable[..., RecordingRunner]:
    return RecordingRunner
