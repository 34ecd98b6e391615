import threading
import time

from printbridge.intake.artifact_store import ArtifactStore
from printbridge.logging.logger import Log
from printbridge.spool.monitor import SpoolMonitor
from printbridge.tracking.correlator import Correlator
from printbridge.tracking.store import RegistrationStore

_IDLE_POLL_SECONDS = 0.2


class JobTracker:
    """Runs the spool monitor and the correlator on their own threads.

    Independent of any single request: it is started once per process and
    outlives the batches it tracks.
    """

    def __init__(
        self,
        monitor: SpoolMonitor,
        correlator: Correlator,
        store: RegistrationStore,
    ) -> None:
        self._monitor = monitor
        self._correlator = correlator
        self._store = store
        self._stop = threading.Event()
        self._consumer: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._consumer is not None and self._consumer.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._consumer = threading.Thread(
            target=self._correlator.run,
            args=(self._monitor.events, self._stop),
            name="correlator",
            daemon=True,
        )
        self._consumer.start()
        self._monitor.start()
        Log.info("Job tracker started")

    def stop(self, timeout: float = 5.0) -> None:
        """Stop both threads and delete documents of jobs that never finished."""
        self._monitor.stop(timeout)
        self._stop.set()
        if self._consumer is not None:
            self._consumer.join(timeout)
        for registration in self._store.drain():
            Log.warning(
                f"Job {registration.external_job_id} ({registration.filename}) unfinished "
                f"at shutdown in state {registration.state.value}, discarding its document"
            )
            ArtifactStore.discard(registration.document_path)
        Log.info("Job tracker stopped")

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Block until no job is tracked. Returns False on timeout."""
        deadline = None if timeout is None else time.monotonic() + timeout
        while len(self._store) > 0:
            if deadline is not None and time.monotonic() >= deadline:
                return False
            time.sleep(_IDLE_POLL_SECONDS)
        return True
