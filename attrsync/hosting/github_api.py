# Entrius 2025
import logging
from typing import Any, Dict, List, Optional

import requests

from attrsync.classes import RepositoryDescriptor
from attrsync.constants import BASE_GITHUB_API_URL, GITHUB_API_PAGE_SIZE, GITHUB_API_TIMEOUT
from attrsync.hosting.errors import ServiceUnavailable
from attrsync.utils.utils import parse_github_timestamp

logger = logging.getLogger(__name__)


def make_headers(token: str) -> Dict[str, str]:
    """Build standard GitHub HTTP headers for a PAT.

    Args:
        token (str): Github pat
    Returns:
        Dict[str, str]: Mapping of HTTP header names to values.
    """
    return {
        "Authorization": f"token {token}",
        "Accept": "application/vnd.github.v3+json",
    }


class GitHubApiClient:
    """Lists repositories through the GitHub REST API.

    Failed requests are not retried: any non-200 response or transport
    error raises ServiceUnavailable.
    """

    def __init__(self, token: str, base_url: str = BASE_GITHUB_API_URL):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.headers = make_headers(token)

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = requests.get(url, headers=self.headers, params=params, timeout=GITHUB_API_TIMEOUT)
        except requests.exceptions.RequestException as e:
            raise ServiceUnavailable(f"GitHub API request to {path} failed: {e}") from e

        if response.status_code == 401:
            raise ServiceUnavailable("Authentication failed. Check your GitHub token.")
        if response.status_code != 200:
            raise ServiceUnavailable(f"GitHub API {path} returned {response.status_code}: {response.text[:200]}")

        try:
            return response.json()
        except ValueError as e:
            raise ServiceUnavailable(f"Invalid JSON from GitHub API {path}: {e}") from e

    def get_current_user(self) -> Optional[str]:
        """Login of the token owner."""
        data = self._get("/user")
        return data.get("login") if isinstance(data, dict) else None

    def list_repositories(self, account: str, limit: int) -> List[RepositoryDescriptor]:
        """
        List repositories owned by an account, following pagination until
        `limit` repositories are collected or the listing is exhausted.

        When the account is the token owner, /user/repos is used so private
        repositories are included.
        """
        if account.lower() == (self.get_current_user() or "").lower():
            path = "/user/repos"
            base_params = {"affiliation": "owner", "sort": "pushed"}
        else:
            path = f"/users/{account}/repos"
            base_params = {"type": "owner", "sort": "pushed"}

        repositories: List[RepositoryDescriptor] = []
        page = 1
        while len(repositories) < limit:
            params = dict(base_params, per_page=GITHUB_API_PAGE_SIZE, page=page)
            items = self._get(path, params)
            if not isinstance(items, list):
                raise ServiceUnavailable(f"Unexpected response from GitHub API {path}: expected a list")
            if not items:
                break

            for item in items:
                try:
                    repositories.append(self._to_descriptor(item, account))
                except (KeyError, TypeError, ValueError) as e:
                    raise ServiceUnavailable(f"Malformed repository entry from GitHub API: {e}") from e

            logger.debug(f"Fetched page {page} of {path} ({len(items)} repositories)")
            if len(items) < GITHUB_API_PAGE_SIZE:
                break
            page += 1

        return repositories[:limit]

    @staticmethod
    def _to_descriptor(item: Dict[str, Any], account: str) -> RepositoryDescriptor:
        owner = (item.get("owner") or {}).get("login") or account
        return RepositoryDescriptor(
            owner=owner,
            name=item["name"],
            is_private=bool(item.get("private", False)),
            is_fork=bool(item.get("fork", False)),
            pushed_at=parse_github_timestamp(item.get("pushed_at")),
        )
