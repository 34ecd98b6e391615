from dataclasses import dataclass, replace
from enum import Enum


class SpoolStatus(str, Enum):
    SPOOLING = "Spooling"
    PRINTING = "Printing"
    COMPLETED = "Completed"
    ERROR = "Error"

    @classmethod
    def from_os(cls, raw: str | None) -> "SpoolStatus":
        """Map a free-form OS status string ("Paused | Printing", ...) to a status."""
        text = (raw or "").lower()
        if "error" in text:
            return cls.ERROR
        if "complete" in text or "printed" in text:
            return cls.COMPLETED
        if "print" in text:
            return cls.PRINTING
        return cls.SPOOLING


@dataclass(frozen=True)
class SpoolJob:
    """Local mirror of one OS print-queue entry."""

    id: str
    document: str
    printer: str = ""
    status: SpoolStatus = SpoolStatus.SPOOLING
    pages_printed: int | None = None

    def as_completed(self) -> "SpoolJob":
        return replace(self, status=SpoolStatus.COMPLETED)


class SpoolEventKind(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    FAILED = "failed"


@dataclass(frozen=True)
class SpoolEvent:
    kind: SpoolEventKind
    job: SpoolJob
