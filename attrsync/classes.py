from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from attrsync.constants import (
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_DELAY_SECONDS,
    DEFAULT_MARKER_NAME,
    DEFAULT_REPO_LIMIT,
    DEFAULT_SOURCE,
    DEFAULT_TEMPLATE_PATH,
    DEFAULT_WORKDIR,
)


class OutcomeStatus(Enum):
    """Result of applying the template to one repository"""

    SUCCESS = "Success"
    SKIPPED = "Skipped"
    ERROR = "Error"


@dataclass(frozen=True)
class RepositoryDescriptor:
    """Repository as reported by the hosting service"""

    owner: str
    name: str
    is_private: bool
    is_fork: bool
    pushed_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def visibility(self) -> str:
        return "private" if self.is_private else "public"


@dataclass(frozen=True)
class ProcessingOutcome:
    """Recorded result for one repository"""

    repository_name: str
    status: OutcomeStatus
    message: str

    @property
    def is_success(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS


@dataclass(frozen=True)
class CommandResult:
    """Result of running an external command"""

    ok: bool
    stdout: str = ""
    stderr: str = ""

    @property
    def output(self) -> str:
        return self.stdout if self.ok else (self.stderr or self.stdout)


@dataclass
class RunConfig:
    """Settings for one apply run, resolved from flags, env and config file"""

    account: Optional[str]
    template_path: str = DEFAULT_TEMPLATE_PATH
    workdir: str = DEFAULT_WORKDIR
    marker_name: str = DEFAULT_MARKER_NAME
    commit_message: str = DEFAULT_COMMIT_MESSAGE
    dry_run: bool = False
    include_private: bool = False
    include_forks: bool = False
    limit: int = DEFAULT_REPO_LIMIT
    delay: float = DEFAULT_DELAY_SECONDS
    source: str = DEFAULT_SOURCE


@dataclass
class RunSummary:
    """Ordered outcomes of a run"""

    outcomes: List[ProcessingOutcome] = field(default_factory=list)

    def add(self, outcome: ProcessingOutcome) -> None:
        self.outcomes.append(outcome)

    def tally(self) -> Dict[OutcomeStatus, int]:
        """Count outcomes per status. Every status is present, zero or not."""
        counts = {status: 0 for status in OutcomeStatus}
        for outcome in self.outcomes:
            counts[outcome.status] += 1
        return counts

    def failures(self) -> List[ProcessingOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.is_success]

    @property
    def total(self) -> int:
        return len(self.outcomes)
