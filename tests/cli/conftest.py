# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Shared fixtures for CLI tests."""

import importlib
import logging

import pytest
from click.testing import CliRunner

from attrsync.classes import CommandResult
from attrsync.constants import ENV_ACCOUNT, ENV_GITHUB_TOKEN, ENV_SOURCE, ENV_TEMPLATE, ENV_WORKDIR


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Point the saved-config location at a temporary file."""
    path = tmp_path / 'home' / '.attrsync' / 'config.json'
    monkeypatch.setattr('attrsync.cli.config_commands.ATTRSYNC_DIR', path.parent)
    monkeypatch.setattr('attrsync.cli.config_commands.CONFIG_FILE', path)
    return path


@pytest.fixture
def cli_env(tmp_path, monkeypatch, config_file, fake_gh, git_factory):
    """Isolated environment: no ATTRSYNC_* variables, fake gh and git, no real git version check."""
    for name in (ENV_ACCOUNT, ENV_TEMPLATE, ENV_WORKDIR, ENV_SOURCE, ENV_GITHUB_TOKEN):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(importlib.import_module('attrsync.cli.main'), 'GitHubCli', lambda: fake_gh)
    monkeypatch.setattr('attrsync.prerequisites.run_command', lambda cmd, cwd=None: CommandResult(ok=True))
    monkeypatch.setattr('attrsync.applier.GitWorkingCopy', git_factory)
    return fake_gh


@pytest.fixture
def cli_root():
    from attrsync.cli.main import cli

    return cli


@pytest.fixture(autouse=True)
def reset_logging():
    """Commands configure the root logger; drop their handlers once the test ends."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
