"""Background poller that turns print-queue snapshots into events."""

import queue
import threading

from printbridge.logging.logger import Log
from printbridge.spool.models import SpoolEvent, SpoolEventKind, SpoolJob, SpoolStatus
from printbridge.spool.sources import BaseSpoolSource


class SpoolMonitor:
    """Poll the OS queue and emit added/removed/failed events.

    Events go into a bounded FIFO queue read by a single consumer, so events
    for one spool id arrive in the order they were observed. When the queue
    stays full for `put_timeout_seconds`, the event is dropped, logged and
    counted in `dropped_events`.
    """

    def __init__(
        self,
        source: BaseSpoolSource,
        *,
        interval_seconds: float = 1.0,
        queue_size: int = 1000,
        put_timeout_seconds: float = 1.0,
    ) -> None:
        self._source = source
        self._interval_seconds = interval_seconds
        self._put_timeout_seconds = put_timeout_seconds
        self.events: queue.Queue[SpoolEvent] = queue.Queue(maxsize=queue_size)
        self.dropped_events = 0
        self._snapshot: dict[str, SpoolJob] = {}
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def snapshot(self) -> dict[str, SpoolJob]:
        return dict(self._snapshot)

    def tick(self) -> list[SpoolEvent]:
        """Run one poll cycle and return the events it emitted.

        Raises:
            SpoolQueryError: if the queue could not be read. The snapshot is
                left unchanged.
        """
        current = {job.id: job for job in self._source.read_jobs()}
        previous = self._snapshot
        emitted: list[SpoolEvent] = []

        for job_id, job in current.items():
            before = previous.get(job_id)
            if before is None:
                emitted.append(SpoolEvent(SpoolEventKind.ADDED, job))
                if job.status is SpoolStatus.ERROR:
                    emitted.append(SpoolEvent(SpoolEventKind.FAILED, job))
            elif job.status is SpoolStatus.ERROR and before.status is not SpoolStatus.ERROR:
                emitted.append(SpoolEvent(SpoolEventKind.FAILED, job))

        for job_id, job in previous.items():
            if job_id not in current:
                emitted.append(SpoolEvent(SpoolEventKind.REMOVED, job.as_completed()))

        self._snapshot = current
        for event in emitted:
            Log.debug(f"[SPOOLER {event.kind.value.upper()}] Job {event.job.id}: {event.job.document}")
            self._emit(event)
        return emitted

    def run(self, max_ticks: int | None = None) -> None:
        """Poll until stopped. Errors in a cycle are logged and the loop goes on.

        If max_ticks is set, stop after that many cycles (for testing).
        """
        Log.info(f"Spool monitor started, polling every {self._interval_seconds}s")
        ticks = 0
        while not self._stop.is_set():
            try:
                self.tick()
            except Exception as exc:
                Log.warning(f"Spool poll failed, will retry: {exc}")
            ticks += 1
            if max_ticks is not None and ticks >= max_ticks:
                break
            self._stop.wait(self._interval_seconds)
        Log.info("Spool monitor stopped")

    def start(self) -> threading.Thread:
        if self._thread is None or not self._thread.is_alive():
            self._stop.clear()
            self._thread = threading.Thread(target=self.run, name="spool-monitor", daemon=True)
            self._thread.start()
        return self._thread

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)

    def _emit(self, event: SpoolEvent) -> None:
        try:
            self.events.put(event, timeout=self._put_timeout_seconds)
        except queue.Full:
            self.dropped_events += 1
            Log.warning(
                f"Spool event queue full, dropped {event.kind.value} for job {event.job.id} "
                f"({self.dropped_events} dropped so far)"
            )
