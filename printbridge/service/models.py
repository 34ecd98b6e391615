from dataclasses import dataclass, field
from enum import Enum


class BatchStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILURE = "failure"


SENT_TO_SPOOLER = "sent to spooler"
FAILED = "failed"


@dataclass(frozen=True)
class FileResult:
    """Outcome for one uploaded file."""

    file: str
    status: str
    internal_name: str | None = None
    error_type: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == SENT_TO_SPOOLER

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"file": self.file, "status": self.status}
        if self.internal_name is not None:
            data["internal_name"] = self.internal_name
        if self.error_type is not None:
            data["error_type"] = self.error_type
            data["error"] = self.error
        return data


@dataclass
class BatchResult:
    """Per-file outcomes of one print request, in upload order."""

    results: list[FileResult] = field(default_factory=list)

    @property
    def status(self) -> BatchStatus:
        succeeded = sum(1 for r in self.results if r.ok)
        if self.results and succeeded == len(self.results):
            return BatchStatus.SUCCESS
        if succeeded == 0:
            return BatchStatus.FAILURE
        return BatchStatus.PARTIAL

    @property
    def success(self) -> bool:
        return self.status is BatchStatus.SUCCESS

    def to_dict(self) -> dict[str, object]:
        return {
            "success": self.success,
            "status": self.status.value,
            "results": [r.to_dict() for r in self.results],
        }
