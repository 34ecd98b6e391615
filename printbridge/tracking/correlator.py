"""Ties spool events back to print requests and reports their progress."""

import queue
import threading

from printbridge.intake.artifact_store import ArtifactStore
from printbridge.logging.logger import Log
from printbridge.notify.models import WebhookEvent, WebhookStatus
from printbridge.notify.notifier import WebhookNotifier
from printbridge.spool.models import SpoolEvent, SpoolEventKind, SpoolJob
from printbridge.tracking.exceptions import CorrelationMiss
from printbridge.tracking.models import JobRegistration
from printbridge.tracking.store import RegistrationStore

_GET_TIMEOUT_SECONDS = 0.5


class Correlator:
    """Single consumer of spool events; the only writer of spool-side state."""

    def __init__(self, store: RegistrationStore, notifier: WebhookNotifier) -> None:
        self._store = store
        self._notifier = notifier

    def handle(self, event: SpoolEvent) -> None:
        if event.kind is SpoolEventKind.ADDED:
            self._on_added(event.job)
        elif event.kind is SpoolEventKind.REMOVED:
            self._on_removed(event.job)
        elif event.kind is SpoolEventKind.FAILED:
            self._on_failed(event.job)

    def fail(
        self,
        external_job_id: str,
        webhook_url: str | None,
        message: str,
        registration: JobRegistration | None = None,
    ) -> None:
        """Report a job that failed before printing (normalization or submission).

        A registration that was already stored moves straight to Failed.
        """
        if registration is not None:
            try:
                self._store.fail(registration)
            except CorrelationMiss as miss:
                Log.debug(f"No registration to fail: {miss}")
        Log.error(f"Job {external_job_id} failed: {message}")
        self._notifier.notify(
            webhook_url,
            WebhookEvent(status=WebhookStatus.FAILED, external_job_id=external_job_id, message=message),
        )

    def run(self, events: "queue.Queue[SpoolEvent]", stop: threading.Event) -> None:
        """Consume events until `stop` is set. Handler errors never end the loop."""
        while not stop.is_set():
            try:
                event = events.get(timeout=_GET_TIMEOUT_SECONDS)
            except queue.Empty:
                continue
            try:
                self.handle(event)
            except Exception:
                Log.exception(f"Error handling {event.kind.value} for spool job {event.job.id}")
            finally:
                events.task_done()

    def _on_added(self, job: SpoolJob) -> None:
        try:
            outcome = self._store.match(job)
        except CorrelationMiss as miss:
            Log.debug(f"Spool job {job.id} not tracked: {miss}")
            return
        registration = outcome.registration
        Log.info(f">> MATCHED spool job {job.id} to job {registration.external_job_id}")
        if outcome.started:
            self._notify(registration, WebhookStatus.RUNNING, f"Spooling on {job.printer}")

    def _on_removed(self, job: SpoolJob) -> None:
        try:
            outcome = self._store.complete(job)
        except CorrelationMiss:
            Log.info(f">> UNMATCHED spool job {job.id} removed (orphaned or external job)")
            return
        registration = outcome.registration
        if not outcome.finished:
            Log.info(
                f"Spool job {job.id} done for job {registration.external_job_id}, "
                f"{registration.completed_submissions}/{registration.expected_submissions} submissions"
            )
            return
        Log.info(f">> REPORTING COMPLETION for job {registration.external_job_id}")
        self._notify(
            registration,
            WebhookStatus.COMPLETED,
            "Print job finished successfully",
            pages_printed=registration.pages_printed,
        )
        ArtifactStore.discard(registration.document_path)

    def _on_failed(self, job: SpoolJob) -> None:
        try:
            registration = self._store.fail_spool_job(job.id)
        except CorrelationMiss:
            Log.warning(f"Untracked spool job {job.id} entered error state")
            return
        Log.error(f"Spool job {job.id} for job {registration.external_job_id} errored on {job.printer}")
        self._notify(registration, WebhookStatus.FAILED, f"Print job error on {job.printer}")
        ArtifactStore.discard(registration.document_path)

    def _notify(
        self,
        registration: JobRegistration,
        status: WebhookStatus,
        message: str,
        pages_printed: int | None = None,
    ) -> None:
        self._notifier.notify(
            registration.webhook_url,
            WebhookEvent(
                status=status,
                external_job_id=registration.external_job_id,
                message=message,
                pages_printed=pages_printed,
            ),
        )
