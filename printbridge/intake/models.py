from dataclasses import dataclass
from pathlib import Path

from printbridge.intake.formats import DocumentFormat, file_extension


@dataclass(frozen=True)
class IncomingFile:
    """A file as received from the caller, before it touches the disk."""

    filename: str
    content: bytes


@dataclass(frozen=True)
class UploadArtifact:
    """An uploaded file persisted under the upload directory."""

    id: str
    original_filename: str
    format: DocumentFormat
    storage_path: Path

    @property
    def extension(self) -> str:
        return file_extension(self.original_filename)
