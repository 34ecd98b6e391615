"""Shared correlation state between the request path and the spool monitor."""

import threading
from dataclasses import dataclass

from printbridge.spool.models import SpoolJob
from printbridge.tracking.exceptions import CorrelationMiss, DuplicateRegistrationError
from printbridge.tracking.models import JobRegistration, JobState


@dataclass(frozen=True)
class MatchOutcome:
    registration: JobRegistration
    started: bool


@dataclass(frozen=True)
class CompletionOutcome:
    registration: JobRegistration
    finished: bool


class RegistrationStore:
    """Registrations indexed by filename and, once matched, by spool id.

    Every read-modify-write happens under one lock, so both indexes always
    change together.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_filename: dict[str, JobRegistration] = {}
        self._by_spool_id: dict[str, JobRegistration] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_filename)

    def register(self, registration: JobRegistration) -> None:
        with self._lock:
            if registration.filename in self._by_filename:
                raise DuplicateRegistrationError(
                    f"{registration.filename} is already being tracked"
                )
            self._by_filename[registration.filename] = registration

    def get(self, filename: str) -> JobRegistration | None:
        with self._lock:
            return self._by_filename.get(filename)

    def get_by_spool_id(self, spool_id: str) -> JobRegistration | None:
        with self._lock:
            return self._by_spool_id.get(spool_id)

    def match(self, job: SpoolJob) -> MatchOutcome:
        """Attach a newly seen spool job to the first registration it names.

        Candidates are scanned in registration order; a registration whose
        filename occurs in the spool document name and that still expects a
        spool job wins.

        Raises:
            CorrelationMiss: if the job is already matched or nothing fits.
        """
        with self._lock:
            if job.id in self._by_spool_id:
                raise CorrelationMiss(f"Spool job {job.id} is already matched")
            for registration in self._by_filename.values():
                if registration.awaiting_spool_job and registration.filename in job.document:
                    registration.spool_ids.append(job.id)
                    self._by_spool_id[job.id] = registration
                    started = registration.state is JobState.PENDING
                    if started:
                        registration.transition(JobState.RUNNING)
                    return MatchOutcome(registration=registration, started=started)
        raise CorrelationMiss(f"No registration matches spool document {job.document!r}")

    def complete(self, job: SpoolJob) -> CompletionOutcome:
        """Count one spool job as finished.

        The registration completes, and leaves both indexes, once every
        expected submission has finished.

        Raises:
            CorrelationMiss: if the spool id is unknown.
        """
        with self._lock:
            registration = self._by_spool_id.pop(job.id, None)
            if registration is None:
                raise CorrelationMiss(f"Spool job {job.id} has no registration")
            registration.completed_submissions += 1
            registration.add_pages(job.pages_printed)
            if not registration.all_submissions_done:
                return CompletionOutcome(registration=registration, finished=False)
            registration.transition(JobState.COMPLETED)
            self._drop(registration)
            return CompletionOutcome(registration=registration, finished=True)

    def fail_spool_job(self, spool_id: str) -> JobRegistration:
        """Fail the registration owning a spool job.

        Raises:
            CorrelationMiss: if the spool id is unknown.
        """
        with self._lock:
            registration = self._by_spool_id.get(spool_id)
            if registration is None:
                raise CorrelationMiss(f"Spool job {spool_id} has no registration")
            registration.transition(JobState.FAILED)
            self._drop(registration)
            return registration

    def fail(self, registration: JobRegistration) -> JobRegistration:
        """Fail a tracked registration, typically before any spool job was seen.

        Raises:
            CorrelationMiss: if this registration is not the one tracked under
                its filename.
        """
        with self._lock:
            if self._by_filename.get(registration.filename) is not registration:
                raise CorrelationMiss(f"{registration.filename} is not being tracked")
            registration.transition(JobState.FAILED)
            self._drop(registration)
            return registration

    def drain(self) -> list[JobRegistration]:
        """Remove and return every registration still tracked."""
        with self._lock:
            remaining = list(self._by_filename.values())
            self._by_filename.clear()
            self._by_spool_id.clear()
            return remaining

    def _drop(self, registration: JobRegistration) -> None:
        self._by_filename.pop(registration.filename, None)
        for spool_id in registration.spool_ids:
            if self._by_spool_id.get(spool_id) is registration:
                del self._by_spool_id[spool_id]
