import uuid
from pathlib import Path

from printbridge.intake.formats import detect_format
from printbridge.intake.models import IncomingFile, UploadArtifact
from printbridge.logging.logger import Log

# Short enough that "<id>.converted.pdf" survives lpq's 29-column file field.
ARTIFACT_ID_LENGTH = 12


class ArtifactStore:
    """Persists uploads as extensionless files named by a random id."""

    def __init__(self, upload_dir: Path) -> None:
        self._upload_dir = upload_dir

    @property
    def upload_dir(self) -> Path:
        return self._upload_dir

    def ensure_dir(self) -> None:
        """Create the upload directory if needed. Called once at startup."""
        self._upload_dir.mkdir(parents=True, exist_ok=True)

    def save(self, incoming: IncomingFile) -> UploadArtifact:
        """Validate the extension and write the bytes to disk.

        Raises:
            UnsupportedFormatError: if the extension is not recognized.
                Nothing is written in that case.
        """
        document_format = detect_format(incoming.filename)
        artifact_id = uuid.uuid4().hex[:ARTIFACT_ID_LENGTH]
        path = self._upload_dir / artifact_id
        path.write_bytes(incoming.content)
        Log.debug(
            f"Stored upload {incoming.filename!r} as {artifact_id} "
            f"({len(incoming.content)} bytes, {document_format.value})"
        )
        return UploadArtifact(
            id=artifact_id,
            original_filename=incoming.filename,
            format=document_format,
            storage_path=path,
        )

    @staticmethod
    def discard(*paths: Path | None) -> None:
        """Delete temporary files, ignoring ones that are already gone."""
        for path in paths:
            if path is None:
                continue
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                Log.warning(f"Could not delete temporary file {path}: {exc}")
