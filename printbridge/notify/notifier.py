import zlib
from concurrent.futures import Future, ThreadPoolExecutor

import httpx

from printbridge.logging.logger import Log
from printbridge.notify.exceptions import WebhookDeliveryError
from printbridge.notify.models import WebhookEvent


class WebhookNotifier:
    """POSTs lifecycle events to caller webhooks without blocking the caller.

    Deliveries run on `max_workers` single-thread lanes. Every event of one
    job goes through the same lane, so a job's webhooks arrive in the order
    they were sent.
    """

    def __init__(
        self,
        *,
        client: httpx.Client | None = None,
        timeout_seconds: float = 10,
        max_workers: int = 4,
    ) -> None:
        self._client = client or httpx.Client(timeout=timeout_seconds)
        self._lanes = [
            ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"webhook-{i}")
            for i in range(max(1, max_workers))
        ]

    def notify(self, webhook_url: str | None, event: WebhookEvent) -> Future[None] | None:
        """Queue a delivery and return at once. No-op without a URL."""
        if not webhook_url:
            return None
        lane = self._lanes[zlib.crc32(event.external_job_id.encode()) % len(self._lanes)]
        return lane.submit(self._deliver_logged, webhook_url, event)

    def deliver(self, webhook_url: str, event: WebhookEvent) -> None:
        """POST one event synchronously.

        Raises:
            WebhookDeliveryError: on bad URLs, transport errors or non-2xx responses.
        """
        try:
            response = self._client.post(webhook_url, json=event.to_payload())
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise WebhookDeliveryError(f"{event.status.value} for job {event.external_job_id}: {exc}") from exc

    def close(self) -> None:
        for lane in self._lanes:
            lane.shutdown(wait=True)
        self._client.close()

    def _deliver_logged(self, webhook_url: str, event: WebhookEvent) -> None:
        try:
            self.deliver(webhook_url, event)
        except WebhookDeliveryError as exc:
            Log.error(f"[WEBHOOK FAILED] {exc}")
            return
        except Exception:
            Log.exception(
                f"[WEBHOOK FAILED] {event.status.value} for job {event.external_job_id} to {webhook_url}"
            )
            return
        Log.info(
            f"[WEBHOOK SENT] {event.status.value} for job {event.external_job_id} to {webhook_url}"
        )
