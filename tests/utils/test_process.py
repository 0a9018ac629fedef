# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Unit tests for run_command.
"""

import subprocess
import sys
from unittest.mock import Mock, patch

from attrsync.utils.process import run_command
from attrsync.utils.utils import parse_github_timestamp


@patch('attrsync.utils.process.subprocess.run')
def test_success(mock_run):
    mock_run.return_value = Mock(stdout='  main\n', stderr='')

    result = run_command(['git', 'branch', '--show-current'], cwd='/repo')

    assert result.ok
    assert result.stdout == 'main'
    args, kwargs = mock_run.call_args
    assert args[0] == ['git', 'branch', '--show-current']
    assert kwargs['cwd'] == '/repo'
    assert kwargs['check'] is True
    assert 'shell' not in kwargs


@patch('attrsync.utils.process.subprocess.run')
def test_non_zero_exit(mock_run):
    mock_run.side_effect = subprocess.CalledProcessError(
        128, ['git', 'push'], output='', stderr='fatal: could not read from remote\n'
    )

    result = run_command(['git', 'push'])

    assert not result.ok
    assert result.stderr == 'fatal: could not read from remote'
    assert result.output == 'fatal: could not read from remote'


@patch('attrsync.utils.process.subprocess.run')
def test_missing_binary(mock_run):
    mock_run.side_effect = FileNotFoundError()

    result = run_command(['gh', '--version'])

    assert not result.ok
    assert 'gh not installed' in result.stderr


def test_parse_github_timestamp():
    parsed = parse_github_timestamp('2025-03-04T05:06:07Z')
    assert parsed.year == 2025 and parsed.hour == 5
    assert parsed.utcoffset().total_seconds() == 0
    assert parse_github_timestamp(None) is None
    assert parse_github_timestamp('') is None


@patch('attrsync.utils.process.subprocess.run')
def test_decodes_with_replacement(mock_run):
    mock_run.return_value = Mock(stdout='', stderr='')

    run_command(['git', 'push'])

    _, kwargs = mock_run.call_args
    assert kwargs['encoding'] == 'utf-8'
    assert kwargs['errors'] == 'replace'


def test_invalid_utf8_output_is_returned():
    script = 'import sys; sys.stdout.buffer.write(b"\\xff\\xfe remote: caf\\xe9")'

    result = run_command([sys.executable, '-c', script])

    assert result.ok
    assert 'remote: caf' in result.stdout
    assert '�' in result.stdout


def test_invalid_utf8_on_failure_is_returned():
    script = 'import sys; sys.stderr.buffer.write(b"remote: rejet\\xe9"); sys.exit(1)'

    result = run_command([sys.executable, '-c', script])

    assert not result.ok
    assert result.stderr == 'remote: rejet�'
