from datetime import datetime
from typing import Optional


def parse_github_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as returned by GitHub (trailing 'Z' allowed)."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def repo_full_name(owner: str, name: str) -> str:
    return f"{owner}/{name}"
