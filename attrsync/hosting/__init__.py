from .errors import ServiceUnavailable
from .gh_cli import GitHubCli
from .github_api import GitHubApiClient
from .lister import filter_repositories, list_repositories, sort_by_recency

__all__ = [
    "ServiceUnavailable",
    "GitHubCli",
    "GitHubApiClient",
    "filter_repositories",
    "list_repositories",
    "sort_by_recency",
]
