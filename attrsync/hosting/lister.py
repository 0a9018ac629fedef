import logging
from datetime import datetime, timezone
from typing import Iterable, List

from attrsync.classes import RepositoryDescriptor

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def filter_repositories(
    repositories: Iterable[RepositoryDescriptor],
    include_private: bool = False,
    include_forks: bool = False,
) -> List[RepositoryDescriptor]:
    """Drop private repositories and forks unless explicitly included."""
    return [
        repo
        for repo in repositories
        if (include_private or not repo.is_private) and (include_forks or not repo.is_fork)
    ]


def sort_by_recency(repositories: Iterable[RepositoryDescriptor]) -> List[RepositoryDescriptor]:
    """Most recently pushed first. Never-pushed repositories go last; ties keep listing order."""
    return sorted(
        repositories,
        key=lambda repo: (repo.pushed_at is not None, repo.pushed_at or _OLDEST),
        reverse=True,
    )


def list_repositories(
    client,
    account: str,
    limit: int,
    include_private: bool = False,
    include_forks: bool = False,
) -> List[RepositoryDescriptor]:
    """
    List, filter and sort the repositories an account owns.

    Args:
        client: GitHubCli or GitHubApiClient
        account: User or organization login
        limit: Maximum number of repositories requested from the service
        include_private: Keep private repositories
        include_forks: Keep forks

    Raises:
        ServiceUnavailable: Propagated from the client; not retried
    """
    repositories = client.list_repositories(account, limit)
    kept = filter_repositories(repositories, include_private=include_private, include_forks=include_forks)
    logger.info(f"Listed {len(repositories)} repositories for {account}, {len(kept)} after filtering")
    return sort_by_recency(kept)
