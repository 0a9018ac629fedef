import logging
import time
from typing import Callable, List, Optional

from attrsync.applier import TemplateApplier
from attrsync.classes import ProcessingOutcome, RepositoryDescriptor, RunSummary
from attrsync.constants import DEFAULT_DELAY_SECONDS


class RunOrchestrator:
    """Processes repositories one after another and collects their outcomes."""

    def __init__(
        self,
        applier: TemplateApplier,
        delay: float = DEFAULT_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.applier = applier
        self.delay = delay
        self.sleep = sleep
        self.logger = logging.getLogger(__name__)

        # Callbacks
        self.on_repository_started: Optional[Callable[[int, int, RepositoryDescriptor], None]] = None
        self.on_repository_finished: Optional[Callable[[ProcessingOutcome], None]] = None

    def run(self, repositories: List[RepositoryDescriptor]) -> RunSummary:
        """
        Apply the template to every repository in the given order.

        Per-repository failures never stop the run. Clones are removed when
        the run ends, however it ends.
        """
        summary = RunSummary()
        total = len(repositories)
        self.logger.info(f"Processing {total} repositories (dry run: {self.applier.dry_run})")

        try:
            for index, repo in enumerate(repositories, start=1):
                if self.on_repository_started:
                    self.on_repository_started(index, total, repo)

                outcome = self.applier.apply(repo)
                summary.add(outcome)

                if self.on_repository_finished:
                    self.on_repository_finished(outcome)

                # Ease request-rate pressure on the hosting service
                if index < total and self.delay > 0:
                    self.sleep(self.delay)
        finally:
            self.applier.cleanup()

        tally = summary.tally()
        self.logger.info(
            "Run finished: " + ", ".join(f"{status.value}={count}" for status, count in tally.items())
        )
        return summary
