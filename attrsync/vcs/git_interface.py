import logging
from typing import Callable, List

from attrsync.classes import CommandResult
from attrsync.utils.process import run_command


class GitWorkingCopy:
    """Runs git commands inside one local working copy."""

    def __init__(self, path: str, runner: Callable[..., CommandResult] = run_command):
        self.path = path
        self.runner = runner
        self.logger = logging.getLogger(__name__)

    def _run_git_command(self, cmd: List[str]) -> CommandResult:
        """Run a git command in the working copy."""
        return self.runner(["git"] + cmd, cwd=self.path)

    def status(self) -> CommandResult:
        """Porcelain status; empty stdout means nothing to commit."""
        return self._run_git_command(["status", "--porcelain"])

    def stage(self, files: List[str]) -> CommandResult:
        return self._run_git_command(["add", "--"] + files)

    def commit(self, message: str) -> CommandResult:
        result = self._run_git_command(["commit", "-m", message])
        if result.ok:
            self.logger.info(f"Committed in {self.path}: {message}")
        return result

    def push(self) -> CommandResult:
        """Push the current branch to its default remote."""
        result = self._run_git_command(["push"])
        if result.ok:
            self.logger.info(f"Pushed {self.path}")
        return result
