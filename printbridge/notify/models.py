from dataclasses import dataclass
from enum import Enum


class WebhookStatus(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class WebhookEvent:
    """A lifecycle transition reported to the caller's webhook."""

    status: WebhookStatus
    external_job_id: str
    message: str
    pages_printed: int | None = None

    def to_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "job_detail_id": self.external_job_id,
            "status": self.status.value,
            "message": self.message,
        }
        if self.pages_printed is not None:
            payload["pages_printed"] = self.pages_printed
        return payload
