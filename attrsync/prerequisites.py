import logging
import os
from typing import Optional

from attrsync.constants import SOURCE_API
from attrsync.hosting.gh_cli import GitHubCli
from attrsync.utils.process import run_command

logger = logging.getLogger(__name__)


class PrerequisiteError(Exception):
    """Raised when the environment cannot support a run."""

    pass


def check_template(template_path: str) -> None:
    if not os.path.isfile(template_path):
        raise PrerequisiteError(f"Template file not found: {template_path}")


def check_prerequisites(
    gh: GitHubCli,
    template_path: Optional[str] = None,
    source: Optional[str] = None,
    token: Optional[str] = None,
    runner=None,
) -> None:
    """
    Verify everything a run needs before any repository is touched.

    Args:
        gh: gh client used for cloning (and listing with the gh source)
        template_path: Template to verify, or None when no template is needed
        source: Listing source; the api source needs a token
        token: GitHub token for the api source
        runner: Command runner used to check the git binary

    Raises:
        PrerequisiteError: On the first missing prerequisite
    """
    runner = runner or run_command

    if not gh.is_installed():
        raise PrerequisiteError("GitHub CLI (gh) not found. Install it from https://cli.github.com/")

    if not runner(["git", "--version"]).ok:
        raise PrerequisiteError("git not found. Please install git first.")

    if not gh.is_authenticated():
        raise PrerequisiteError("GitHub CLI is not authenticated. Run: gh auth login")

    if source == SOURCE_API and not token:
        raise PrerequisiteError("GITHUB_TOKEN is required when listing through the GitHub API")

    if template_path is not None:
        check_template(template_path)

    logger.info("All prerequisites satisfied")
