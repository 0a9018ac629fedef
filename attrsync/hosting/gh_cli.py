import json
import logging
from typing import Any, Callable, Dict, List, Optional

from attrsync.classes import CommandResult, RepositoryDescriptor
from attrsync.hosting.errors import ServiceUnavailable
from attrsync.utils.process import run_command
from attrsync.utils.utils import parse_github_timestamp, repo_full_name

LIST_FIELDS = "name,owner,isPrivate,isFork,pushedAt"


class GitHubCli:
    """Interface for the gh command line client."""

    def __init__(self, runner: Callable[..., CommandResult] = run_command):
        self.runner = runner
        self.logger = logging.getLogger(__name__)

    def _run_gh_command(self, cmd: List[str], cwd: Optional[str] = None) -> CommandResult:
        return self.runner(["gh"] + cmd, cwd=cwd)

    def is_installed(self) -> bool:
        return self._run_gh_command(["--version"]).ok

    def is_authenticated(self) -> bool:
        return self._run_gh_command(["auth", "status"]).ok

    def get_current_user(self) -> Optional[str]:
        """Login of the account gh is authenticated as."""
        result = self._run_gh_command(["api", "user", "--jq", ".login"])
        if not result.ok or not result.stdout:
            return None
        return result.stdout.strip()

    def list_repositories(self, account: str, limit: int) -> List[RepositoryDescriptor]:
        """
        List repositories owned by an account.

        Args:
            account: User or organization login
            limit: Maximum number of repositories to return

        Returns:
            Descriptors in the order gh reports them

        Raises:
            ServiceUnavailable: If gh fails or returns output that is not a JSON list
        """
        result = self._run_gh_command(
            ["repo", "list", account, "--limit", str(limit), "--json", LIST_FIELDS]
        )
        if not result.ok:
            raise ServiceUnavailable(f"Could not list repositories for {account}: {result.output}")

        try:
            data = json.loads(result.stdout or "[]")
        except json.JSONDecodeError as e:
            raise ServiceUnavailable(f"Unexpected output from gh repo list: {e}") from e

        if not isinstance(data, list):
            raise ServiceUnavailable("Unexpected output from gh repo list: expected a list")

        try:
            return [self._to_descriptor(item, account) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise ServiceUnavailable(f"Malformed repository entry from gh: {e}") from e

    @staticmethod
    def _to_descriptor(item: Dict[str, Any], account: str) -> RepositoryDescriptor:
        owner = (item.get("owner") or {}).get("login") or account
        return RepositoryDescriptor(
            owner=owner,
            name=item["name"],
            is_private=bool(item.get("isPrivate", False)),
            is_fork=bool(item.get("isFork", False)),
            pushed_at=parse_github_timestamp(item.get("pushedAt")),
        )

    def clone_repository(self, owner: str, name: str, destination: str) -> CommandResult:
        """Shallow-clone owner/name into destination."""
        full_name = repo_full_name(owner, name)
        self.logger.info(f"Cloning {full_name} into {destination}")
        return self._run_gh_command(["repo", "clone", full_name, destination, "--", "--depth=1"])
