from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from printbridge.config.settings import Settings
from printbridge.conversion.exceptions import ConversionError
from printbridge.conversion.factory import NormalizerFactory
from printbridge.conversion.normalizer import DocumentNormalizer, NormalizedDocument
from printbridge.intake.artifact_store import ArtifactStore
from printbridge.intake.exceptions import UploadError
from printbridge.intake.models import IncomingFile, UploadArtifact
from printbridge.logging.logger import Log
from printbridge.pdf.base import BasePageCounter
from printbridge.pdf.exceptions import PdfReadError
from printbridge.pdf.factory import PageCounterFactory
from printbridge.printing.base import PrinterProvider
from printbridge.printing.dispatcher import SplitDispatcher
from printbridge.printing.exceptions import SubmissionError
from printbridge.printing.factory import PrinterProviderFactory
from printbridge.printing.options import PrintOptions
from printbridge.service.models import FAILED, SENT_TO_SPOOLER, BatchResult, FileResult
from printbridge.tracking.correlator import Correlator
from printbridge.tracking.models import JobRegistration
from printbridge.tracking.store import RegistrationStore

_ERROR_CATEGORIES: tuple[type[Exception], ...] = (
    UploadError,
    ConversionError,
    PdfReadError,
    SubmissionError,
)


def error_category(exc: Exception) -> str:
    """Name of the taxonomy class an error belongs to."""
    for category in _ERROR_CATEGORIES:
        if isinstance(exc, category):
            return category.__name__
    return type(exc).__name__


class PrintService:
    """Handles one print request: store -> normalize -> register -> dispatch, per file.

    Files are processed concurrently and independently; one failing file
    never stops the others.
    """

    def __init__(
        self,
        *,
        artifact_store: ArtifactStore,
        normalizer: DocumentNormalizer,
        dispatcher: SplitDispatcher,
        page_counter: BasePageCounter,
        provider: PrinterProvider,
        correlator: Correlator,
        max_workers: int = 4,
    ) -> None:
        self._artifacts = artifact_store
        self._normalizer = normalizer
        self._dispatcher = dispatcher
        self._page_counter = page_counter
        self._provider = provider
        self._correlator = correlator
        self._max_workers = max_workers

    def list_printers(self) -> list[str]:
        return self._provider.list_printers()

    def count_pages(self, incoming: IncomingFile) -> int:
        """Normalize a file only to count its pages. Temporary files are always removed."""
        artifact = self._artifacts.save(incoming)
        document: NormalizedDocument | None = None
        try:
            document = self._normalizer.normalize(artifact)
            return self._page_counter.count_pages(document.path)
        finally:
            ArtifactStore.discard(artifact.storage_path, document.path if document else None)

    def print_batch(
        self,
        files: list[IncomingFile],
        options: PrintOptions,
        external_job_id: str | None = None,
        webhook_url: str | None = None,
    ) -> BatchResult:
        """Print every file and report per-file outcomes in upload order."""
        Log.info(
            f"Incoming print request: job={external_job_id} webhook={webhook_url} "
            f"files={[f.filename for f in files]}"
        )
        if not files:
            return BatchResult()
        workers = max(1, min(len(files), self._max_workers))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="print-file") as pool:
            results = list(
                pool.map(
                    lambda incoming: self._process_file(incoming, options, external_job_id, webhook_url),
                    files,
                )
            )
        batch = BatchResult(results=results)
        Log.info(f"Print request job={external_job_id} finished with status {batch.status.value}")
        return batch

    def _process_file(
        self,
        incoming: IncomingFile,
        options: PrintOptions,
        external_job_id: str | None,
        webhook_url: str | None,
    ) -> FileResult:
        try:
            artifact = self._artifacts.save(incoming)
        except UploadError as exc:
            Log.warning(f"Rejected upload {incoming.filename!r}: {exc}")
            return _failed(incoming.filename, exc)

        document: NormalizedDocument | None = None
        registration: JobRegistration | None = None
        try:
            document = self._normalizer.normalize(artifact)
            if external_job_id:
                registration = JobRegistration(
                    filename=document.filename,
                    external_job_id=external_job_id,
                    document_path=document.path,
                    webhook_url=webhook_url,
                )
            self._dispatcher.dispatch(document, options, registration)
        except Exception as exc:
            Log.error(f"Processing error for {incoming.filename!r}: {exc}")
            self._discard(artifact, document)
            if external_job_id:
                self._correlator.fail(
                    external_job_id,
                    webhook_url,
                    str(exc),
                    registration=registration,
                )
            return _failed(incoming.filename, exc)

        if registration is None:
            # Nothing will correlate this file, so it is not needed past submission.
            self._discard(artifact, document)
        return FileResult(file=incoming.filename, status=SENT_TO_SPOOLER, internal_name=document.filename)

    @staticmethod
    def _discard(artifact: UploadArtifact, document: NormalizedDocument | None) -> None:
        paths: list[Path | None] = [artifact.storage_path]
        if document is not None:
            paths.append(document.path)
        ArtifactStore.discard(*paths)


def _failed(filename: str, exc: Exception) -> FileResult:
    return FileResult(
        file=filename,
        status=FAILED,
        error_type=error_category(exc),
        error=str(exc),
    )


def build_print_service(
    settings: Settings,
    store: RegistrationStore,
    correlator: Correlator,
) -> PrintService:
    """Build a PrintService with all adapters chosen from settings."""
    artifact_store = ArtifactStore(Path(settings.upload_dir))
    artifact_store.ensure_dir()
    page_counter = PageCounterFactory.create(settings)
    provider = PrinterProviderFactory.create(settings)
    return PrintService(
        artifact_store=artifact_store,
        normalizer=NormalizerFactory.create(settings),
        dispatcher=SplitDispatcher(provider, page_counter, store),
        page_counter=page_counter,
        provider=provider,
        correlator=correlator,
        max_workers=settings.batch_max_workers,
    )
