from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from printbridge.tracking.exceptions import InvalidTransitionError


class JobState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


_TRANSITIONS: dict[JobState, frozenset[JobState]] = {
    JobState.PENDING: frozenset({JobState.RUNNING, JobState.FAILED}),
    JobState.RUNNING: frozenset({JobState.COMPLETED, JobState.FAILED}),
    JobState.COMPLETED: frozenset(),
    JobState.FAILED: frozenset(),
}


@dataclass
class JobRegistration:
    """Ties one normalized document to the caller's job and its spool jobs.

    A split dispatch prints the same file more than once, so a registration
    may collect several spool ids before it completes.
    """

    filename: str
    external_job_id: str
    document_path: Path
    webhook_url: str | None = None
    expected_submissions: int = 1
    spool_ids: list[str] = field(default_factory=list)
    completed_submissions: int = 0
    pages_printed: int | None = None
    state: JobState = JobState.PENDING

    @property
    def spool_id(self) -> str | None:
        return self.spool_ids[0] if self.spool_ids else None

    @property
    def is_terminal(self) -> bool:
        return not _TRANSITIONS[self.state]

    @property
    def awaiting_spool_job(self) -> bool:
        return not self.is_terminal and len(self.spool_ids) < self.expected_submissions

    @property
    def all_submissions_done(self) -> bool:
        return self.completed_submissions >= self.expected_submissions

    def transition(self, new_state: JobState) -> None:
        if new_state not in _TRANSITIONS[self.state]:
            raise InvalidTransitionError(
                f"Job {self.external_job_id} ({self.filename}): "
                f"{self.state.value} -> {new_state.value} is not allowed"
            )
        self.state = new_state

    def add_pages(self, pages: int | None) -> None:
        if pages is None:
            return
        self.pages_printed = (self.pages_printed or 0) + pages
