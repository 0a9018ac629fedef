# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Applies the template file to a single repository.

Each call to `TemplateApplier.apply` yields exactly one ProcessingOutcome.
Failures of the external tools never raise; they are recorded as Skipped or
Error outcomes so the run can move on to the next repository.
"""

import logging
import os
import shutil
import tempfile
from typing import Callable, List, Optional

from attrsync.classes import OutcomeStatus, ProcessingOutcome, RepositoryDescriptor
from attrsync.constants import (
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_MARKER_NAME,
    MSG_ALREADY_PRESENT,
    MSG_APPLIED,
    MSG_CLONE_FAILED,
    MSG_COMMIT_FAILED,
    MSG_COPY_FAILED,
    MSG_NO_CHANGES,
    MSG_PUSH_FAILED,
    MSG_STATUS_FAILED,
    MSG_WOULD_APPLY,
)
from attrsync.hosting.gh_cli import GitHubCli
from attrsync.prerequisites import check_template
from attrsync.vcs.git_interface import GitWorkingCopy


class TemplateApplier:
    """Clones a repository, adds the marker file if missing, commits and pushes."""

    def __init__(
        self,
        gh: GitHubCli,
        template_path: str,
        workdir: str,
        marker_name: str = DEFAULT_MARKER_NAME,
        commit_message: str = DEFAULT_COMMIT_MESSAGE,
        dry_run: bool = False,
        git_factory: Optional[Callable[[str], GitWorkingCopy]] = None,
    ):
        check_template(template_path)

        self.gh = gh
        self.template_path = template_path
        self.workdir = workdir
        self.marker_name = marker_name
        self.commit_message = commit_message
        self.dry_run = dry_run
        self.git_factory = git_factory or GitWorkingCopy
        self.logger = logging.getLogger(__name__)

        self._created_workdir = False
        self._clones: List[str] = []

    def _outcome(self, repo: RepositoryDescriptor, status: OutcomeStatus, message: str) -> ProcessingOutcome:
        if status == OutcomeStatus.ERROR:
            self.logger.error(f"{repo.full_name}: {message}")
        else:
            self.logger.info(f"{repo.full_name}: {message}")
        return ProcessingOutcome(repository_name=repo.name, status=status, message=message)

    def _prepare_destination(self, name: str) -> str:
        if not os.path.isdir(self.workdir):
            os.makedirs(self.workdir)
            self._created_workdir = True

        # One scratch directory per clone; existing entries under workdir are never touched
        scratch = tempfile.mkdtemp(prefix=f"{name}-", dir=self.workdir)
        self._clones.append(scratch)
        return os.path.join(scratch, name)

    def apply(self, repo: RepositoryDescriptor) -> ProcessingOutcome:
        """Apply the template to one repository."""
        if self.dry_run:
            return self._outcome(repo, OutcomeStatus.SUCCESS, MSG_WOULD_APPLY)

        # Step 1: Fresh working copy in a scratch directory
        try:
            destination = self._prepare_destination(repo.name)
        except OSError as e:
            self.logger.error(f"Could not prepare working copy for {repo.full_name}: {e}")
            return self._outcome(repo, OutcomeStatus.SKIPPED, MSG_CLONE_FAILED)
        if not self.gh.clone_repository(repo.owner, repo.name, destination).ok:
            return self._outcome(repo, OutcomeStatus.SKIPPED, MSG_CLONE_FAILED)

        # Step 2: Never overwrite an existing marker
        marker_path = os.path.join(destination, self.marker_name)
        if os.path.exists(marker_path):
            return self._outcome(repo, OutcomeStatus.SKIPPED, MSG_ALREADY_PRESENT)

        # Step 3: Copy the template in
        try:
            shutil.copyfile(self.template_path, marker_path)
        except OSError as e:
            self.logger.error(f"Could not copy template into {destination}: {e}")
            return self._outcome(repo, OutcomeStatus.ERROR, MSG_COPY_FAILED)

        git = self.git_factory(destination)

        # Step 4: Anything to commit?
        status = git.status()
        if not status.ok:
            return self._outcome(repo, OutcomeStatus.ERROR, MSG_STATUS_FAILED)
        if not status.stdout.strip():
            return self._outcome(repo, OutcomeStatus.SKIPPED, MSG_NO_CHANGES)

        # Step 5: Stage and commit
        if not git.stage([self.marker_name]).ok or not git.commit(self.commit_message).ok:
            return self._outcome(repo, OutcomeStatus.ERROR, MSG_COMMIT_FAILED)

        # Step 6: Push
        if not git.push().ok:
            return self._outcome(repo, OutcomeStatus.ERROR, MSG_PUSH_FAILED)

        return self._outcome(repo, OutcomeStatus.SUCCESS, MSG_APPLIED)

    def cleanup(self) -> None:
        """Remove the scratch directories made by this applier, and the working directory if it was created here."""
        for path in self._clones:
            self._remove_tree(path)
        self._clones = []

        if self._created_workdir:
            self._remove_tree(self.workdir)
            self._created_workdir = False

    def _remove_tree(self, path: str) -> None:
        if not os.path.exists(path):
            return
        try:
            shutil.rmtree(path)
        except OSError as e:
            self.logger.warning(f"Could not remove {path}: {e}")
